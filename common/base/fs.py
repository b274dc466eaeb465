"""Filesystem helper utilities shared across common modules."""

from __future__ import annotations

from pathlib import Path

HIDDEN_PREFIX = "."


def ensure_dir(path: Path | str) -> Path:
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p


def is_hidden(name: str) -> bool:
    return name.startswith(HIDDEN_PREFIX)


def to_posix(path: Path | str) -> str:
    """Render a relative path with forward slashes for markdown links."""
    return Path(path).as_posix()
