"""Download and unpack Ext JS distributions."""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from urllib.parse import urlparse

import httpx

from extdts.toolchain.models import ToolchainError

logger = logging.getLogger(__name__)


def archive_name(url: str) -> str:
    name = Path(urlparse(url).path).name
    return name or "distribution.zip"


def download_distribution(
    url: str,
    dest_dir: str | Path,
    *,
    force: bool = False,
    timeout: float = 120.0,
) -> Path:
    """Stream *url* into *dest_dir*. An existing archive is reused unless *force*."""
    dest_dir = Path(dest_dir)
    dest = dest_dir / archive_name(url)
    if dest.is_file() and not force:
        logger.info("reusing %s", dest)
        return dest

    dest_dir.mkdir(parents=True, exist_ok=True)
    partial = dest.with_name(dest.name + ".part")
    logger.info("downloading %s", url)
    try:
        with httpx.stream("GET", url, timeout=timeout, follow_redirects=True) as resp:
            resp.raise_for_status()
            with open(partial, "wb") as f:
                for chunk in resp.iter_bytes():
                    f.write(chunk)
    except httpx.HTTPError as e:
        partial.unlink(missing_ok=True)
        raise ToolchainError("httpx", "download", f"{url}: {e}", cause=e) from e

    partial.replace(dest)
    logger.info("downloaded %s (%d bytes)", dest, dest.stat().st_size)
    return dest


def extract_distribution(archive: str | Path, dest_dir: str | Path, folder: str) -> Path:
    """Unzip *archive* into *dest_dir* unless ``dest_dir/folder`` already exists."""
    dest_dir = Path(dest_dir)
    target = dest_dir / folder
    if target.is_dir():
        logger.info("%s already extracted", target)
        return target

    root = dest_dir.resolve()
    try:
        with zipfile.ZipFile(archive) as zf:
            for info in zf.infolist():
                member_path = (dest_dir / info.filename).resolve()
                if not member_path.is_relative_to(root):
                    raise ToolchainError(
                        "unzip", "extract", f"archive member escapes {dest_dir}: {info.filename}"
                    )
            zf.extractall(dest_dir)
    except zipfile.BadZipFile as e:
        raise ToolchainError("unzip", "extract", f"{archive}: {e}", cause=e) from e

    if not target.is_dir():
        raise ToolchainError("unzip", "extract", f"{archive} does not contain {folder}/")
    return target
