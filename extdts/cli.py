"""CLI entry point for ext-dts."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from extdts.config import ExtDtsConfig, load_config
from extdts.config.loader import DEFAULT_CONFIG_TEMPLATE
from extdts.emitter import DeclarationEmitter, Diagnostic, ModuleScope, count_by_kind
from extdts.output import DeclarationWriter
from extdts.registry import ClassRegistry, SchemaMismatchError
from extdts.toolchain import (
    ToolchainError,
    build_version,
    check_declarations,
    generate_declarations,
)

app = typer.Typer(
    name="extdts",
    help="Generate TypeScript declarations for Ext JS from JSDuck exports.",
)

config_app = typer.Typer(help="Manage ext-dts configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: ExtDtsConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        return json.dumps({
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        })


def _configure_logging(cfg: ExtDtsConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(show_path=False)
    logger = logging.getLogger("extdts")
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(_LOG_LEVELS[cfg.log_level])


def _get_config() -> ExtDtsConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to extdts.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _display_diagnostics(diagnostics: list[Diagnostic], limit: int = 20) -> None:
    """Summarize diagnostics by kind, then list the first few."""
    if not diagnostics:
        rprint("[green]No diagnostics.[/green]")
        return

    counts = count_by_kind(diagnostics)
    table = Table(title=f"Diagnostics ({len(diagnostics)})")
    table.add_column("Kind", style="yellow")
    table.add_column("Count", justify="right")
    for kind, count in sorted(counts.items()):
        table.add_row(kind, str(count))
    rprint(table)

    for d in diagnostics[:limit]:
        rprint(f"  [dim]{d.kind}[/dim] {d.subject}: {d.message}")
    if len(diagnostics) > limit:
        rprint(f"  [dim]... {len(diagnostics) - limit} more[/dim]")


@app.command()
def build(
    input_dir: str = typer.Argument(..., help="Directory of JSDuck --export=full JSON files"),
    output: Annotated[
        str | None, typer.Option("--output", "-o", help="Declaration file to write")
    ] = None,
    doc_url: Annotated[
        str | None, typer.Option("--doc-url", help="Base URL for documentation links")
    ] = None,
    prefix: Annotated[
        str | None, typer.Option("--prefix", help="Only read files with this name prefix")
    ] = None,
    dry_run: bool = typer.Option(False, "--dry-run", help="Preview without writing"),
    check: bool = typer.Option(False, "--check", help="Type-check the output with tsc"),
) -> None:
    """Generate declarations from an existing JSDuck export."""
    cfg = _get_config()
    if prefix:
        cfg = cfg.model_copy(
            update={"registry": cfg.registry.model_copy(update={"class_prefix": prefix})}
        )
    rprint(f"[bold]Generating[/bold] declarations from {input_dir}...")

    try:
        result = generate_declarations(input_dir, cfg, doc_url=doc_url)
    except SchemaMismatchError as e:
        rprint(f"[red]Incompatible documentation export:[/red] {e}")
        raise typer.Exit(1)
    except OSError as e:
        rprint(f"[red]Error reading input:[/red] {e}")
        raise typer.Exit(1)

    if dry_run:
        rprint(Syntax(result.text, "typescript", theme="monokai"))
        _display_diagnostics(result.diagnostics)
        return

    writer = DeclarationWriter(cfg.output)
    dest = writer.write_to(result.text, output) if output else writer.write(result.text, "ext")
    rprint(Panel(
        f"[dim]File:[/dim]         {dest}\n"
        f"[dim]Classes:[/dim]      {result.class_count}\n"
        f"[dim]Modules:[/dim]      {result.module_count}\n"
        f"[dim]Size:[/dim]         {len(result.text)} bytes",
        title="Declarations Written",
        border_style="green",
    ))
    _display_diagnostics(result.diagnostics)

    if check:
        _run_check(dest, cfg)


def _run_check(path: Path, cfg: ExtDtsConfig) -> None:
    try:
        result = check_declarations(path, cfg.toolchain.tsc_command, cfg.toolchain.timeout)
    except ToolchainError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    if not result.ok:
        typer.echo(result.output)
        rprint(f"[red]tsc rejected[/red] {path} (exit {result.returncode})")
        raise typer.Exit(1)
    rprint(f"[green]tsc accepted[/green] {path}")


@app.command()
def check(
    path: str = typer.Argument(..., help="Declaration file to type-check"),
) -> None:
    """Type-check a generated declaration file with tsc."""
    decl = Path(path)
    if not decl.is_file():
        rprint(f"[red]Error:[/red] File not found: {decl}")
        raise typer.Exit(1)
    _run_check(decl, _get_config())


@app.command()
def generate(
    version: Annotated[
        str | None, typer.Option("--version", "-v", help="Only build this configured version")
    ] = None,
    skip_fetch: bool = typer.Option(False, "--skip-fetch", help="Use an already unpacked distribution"),
    skip_check: bool = typer.Option(False, "--skip-check", help="Skip the tsc/tsfmt gate"),
) -> None:
    """Download, document, generate and check every configured Ext version."""
    cfg = _get_config()
    versions = [v for v in cfg.versions if version is None or v.name == version]
    if not versions:
        rprint(f"[red]Error:[/red] No configured version named '{version}'")
        raise typer.Exit(1)

    table = Table(title=f"Builds ({len(versions)})")
    table.add_column("Version", style="cyan")
    table.add_column("Classes", justify="right")
    table.add_column("Diagnostics", justify="right", style="yellow")
    table.add_column("Checked", justify="center")
    table.add_column("File", style="dim")

    for v in versions:
        rprint(f"[bold]Building[/bold] {v.name}...")
        try:
            report = build_version(v, cfg, skip_fetch=skip_fetch, skip_check=skip_check)
        except (ToolchainError, SchemaMismatchError) as e:
            rprint(f"[red]Build failed for {v.name}:[/red] {e}")
            raise typer.Exit(1)
        except OSError as e:
            rprint(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)
        table.add_row(
            report.version,
            str(report.class_count),
            str(len(report.diagnostics)),
            "[green]yes[/green]" if report.checked else "-",
            report.declaration_path,
        )
    rprint(table)


@app.command()
def inspect(
    input_dir: str = typer.Argument(..., help="Directory of JSDuck JSON files"),
    name: str = typer.Argument(..., help="Class name or alias"),
) -> None:
    """Show how one documented class is emitted."""
    cfg = _get_config()
    try:
        registry = ClassRegistry.from_directory(input_dir, cfg.registry)
    except (SchemaMismatchError, OSError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    cls = registry.lookup_class(name)
    if cls is None:
        rprint(f"[red]Error:[/red] Unknown class '{name}'")
        raise typer.Exit(1)

    ancestry = " → ".join(a.name for a in registry.ancestors(cls)) or "(none)"
    kinds: dict[str, int] = {}
    for m in cls.members:
        kinds[m.tagname] = kinds.get(m.tagname, 0) + 1
    members_str = ", ".join(f"{k}: {n}" for k, n in sorted(kinds.items())) or "none"
    rprint(Panel(
        f"[bold]{cls.name}[/bold]\n"
        f"{cls.short_doc or '(no description)'}\n\n"
        f"[dim]Aliases:[/dim]   {', '.join(cls.aliases) or 'none'}\n"
        f"[dim]Ancestry:[/dim]  {ancestry}\n"
        f"[dim]Singleton:[/dim] {cls.singleton}\n"
        f"[dim]Members:[/dim]   {members_str}",
        title="Class Record",
        border_style="blue",
    ))

    emitter = DeclarationEmitter(registry, cfg.emitter)
    module = next(m for m in registry.modules if m.name == cls.module_name)
    scope = ModuleScope.for_module(module, cfg.emitter.alias_prefix)
    rprint(Syntax(emitter.emit_class(cls, scope), "typescript", theme="monokai"))
    _display_diagnostics(emitter.diagnostics.items)


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default extdts.yaml in current directory."""
    target = Path("extdts.yaml")
    if target.exists() and not force:
        rprint("[yellow]extdts.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
