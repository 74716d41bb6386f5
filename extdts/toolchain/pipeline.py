"""Build pipeline: distribution → JSDuck export → declarations → tsc/tsfmt gate."""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from extdts.config.models import ExtDtsConfig, ExtVersionConfig
from extdts.emitter import DeclarationEmitter
from extdts.output import DeclarationWriter
from extdts.registry import ClassRegistry
from extdts.toolchain.checker import check_declarations, format_declarations
from extdts.toolchain.fetch import download_distribution, extract_distribution
from extdts.toolchain.jsduck import run_jsduck
from extdts.toolchain.models import BuildReport, GenerationResult, ToolchainError

logger = logging.getLogger(__name__)


def generate_declarations(
    input_dir: str | Path,
    config: ExtDtsConfig,
    *,
    doc_url: str | None = None,
    generated_at: datetime | None = None,
) -> GenerationResult:
    """Load a JSDuck export and emit its declarations. Nothing is written."""
    registry = ClassRegistry.from_directory(input_dir, config.registry)
    emitter_cfg = config.emitter
    if doc_url is not None:
        emitter_cfg = emitter_cfg.model_copy(update={"doc_url": doc_url})

    emitter = DeclarationEmitter(registry, emitter_cfg)
    text = emitter.emit(generated_at)
    return GenerationResult(
        text=text,
        class_count=len(registry),
        module_count=len(registry.modules),
        diagnostics=list(emitter.diagnostics.items),
    )


def build_version(
    version: ExtVersionConfig,
    config: ExtDtsConfig,
    *,
    skip_fetch: bool = False,
    skip_check: bool = False,
) -> BuildReport:
    """Run every pipeline stage for one Ext version.

    Steps:
        1. Download and unzip the distribution (unless skip_fetch)
        2. Run JSDuck over its sources (skipped if the export exists)
        3. Generate and write the declaration file
        4. Type-check it with tsc, then format it with tsfmt (unless skip_check)
    """
    writer = DeclarationWriter(config.output)
    decl_path = writer.declaration_path(version.name)
    version_dir = decl_path.parent
    ext_dir = version_dir / version.folder
    docs_dir = version_dir / f"{version.folder}.docs"
    tools = config.toolchain

    # 1. Fetch
    if not skip_fetch:
        archive = download_distribution(
            version.url, version_dir, timeout=tools.download_timeout
        )
        extract_distribution(archive, version_dir, version.folder)

    # 2. Extract documentation
    run_jsduck(
        ext_dir / "src",
        docs_dir,
        executable=tools.jsduck,
        extra=version.jsduck_extra,
        timeout=tools.timeout,
    )

    # 3. Generate
    result = generate_declarations(docs_dir, config, doc_url=version.doc_url)
    logger.info("writing %d classes for %s", result.class_count, version.name)
    writer.write_to(result.text, decl_path)
    report = BuildReport(
        version=version.name,
        declaration_path=str(decl_path),
        class_count=result.class_count,
        diagnostics=result.diagnostics,
    )
    if skip_check:
        return report

    # 4. Gate
    check = check_declarations(decl_path, tools.tsc_command, tools.timeout)
    if not check.ok:
        raise ToolchainError(
            "tsc",
            "check",
            f"generation failure on {version.name}: {check.output[:500]}",
            returncode=check.returncode,
        )
    report.checked = True

    if tools.format_output:
        formatted = format_declarations(decl_path, tools.tsfmt_command, tools.timeout)
        if not formatted.ok:
            logger.warning("tsfmt failed; declarations usable but unformatted")
        report.formatted = formatted.ok
    return report
