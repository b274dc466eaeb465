"""Shared helpers for filesystem tooling in the `file` package."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Optional

from common.base.logging import setup_logging


def resolve_root(root: Path | str) -> Path:
    """Expand ``~``, ``.`` and ``..`` and check that ``root`` is a directory.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        NotADirectoryError: If ``root`` is not a directory.
    """

    root_path = Path(root).expanduser().resolve()
    if not root_path.exists():
        raise FileNotFoundError(f"Root directory not found: {root_path}")
    if not root_path.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root_path}")
    return root_path


def pick_root(cli_value: Optional[str], config: Mapping[str, Any]) -> Path:
    """Command-line root wins, then the first configured root, then the cwd."""
    if cli_value:
        return Path(cli_value).expanduser().resolve()
    roots = config.get("roots") or []
    if roots:
        return Path(roots[0]).expanduser().resolve()
    return Path.cwd()


def configure_logging(level: Optional[str], config: Mapping[str, Any]) -> None:
    logging_cfg = dict(config.get("__logging__") or {})
    setup_logging(
        level=level or logging_cfg.get("level"),
        use_rich=logging_cfg.get("use_rich"),
        log_dir=logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )
