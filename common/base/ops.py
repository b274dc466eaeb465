"""
common.base.ops

Filesystem mutations shared by the Folio tools.

 - Dry-run support for destructive operations
 - Collisions raise instead of silently overwriting
 - Logging integration
"""

from __future__ import annotations

import os
from pathlib import Path

from .file_io import write_text
from .logging import get_logger

log = get_logger(__name__)


def _same_entry(src: Path, dst: Path) -> bool:
    # Case-only renames on case-insensitive filesystems resolve to the same inode.
    try:
        return os.path.samefile(src, dst)
    except OSError:
        return False


def rename_path(src: Path | str, dst: Path | str, dry_run: bool = False) -> Path:
    """
    Rename a file or directory in place.

    Args:
        src: Existing path.
        dst: Target path (same parent or an already existing one).
        dry_run: Log the rename without performing it.

    Returns:
        The path the entry lives at afterwards (``src`` in dry-run mode).

    Raises:
        FileNotFoundError: If ``src`` does not exist.
        FileExistsError: If ``dst`` already exists and is a different entry.
    """
    src_path, dst_path = Path(src), Path(dst)
    if not src_path.exists():
        raise FileNotFoundError(f"Source not found: {src_path}")
    if dst_path.exists() and not _same_entry(src_path, dst_path):
        raise FileExistsError(f"Destination exists: {dst_path}")

    if dry_run:
        log.info(f"[DRY-RUN] Would rename {src_path} → {dst_path}")
        return src_path

    os.rename(src_path, dst_path)
    log.debug(f"Renamed {src_path} → {dst_path}")
    return dst_path


def replace_text(path: Path | str, content: str, dry_run: bool = False) -> bool:
    """
    Overwrite a text file with ``content`` (newlines written verbatim).

    Returns True when the file was written (or would have been in dry-run mode).
    """
    p = Path(path)
    if dry_run:
        log.info(f"[DRY-RUN] Would rewrite {p}")
        return True

    write_text(p, content, newline="")
    log.debug(f"Wrote {len(content)} characters to {p}")
    return True
