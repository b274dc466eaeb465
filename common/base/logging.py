"""
common.base.logging

Logging setup for Folio Tools.

Every record carries its level emoji and colour. The console shows them
through Rich (or a plain ANSI stream when Rich is turned off), and an optional
per-run log file is written only when a log directory is configured.
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, cast

from rich.logging import RichHandler
from rich.text import Text

from .fs import ensure_dir

BASE_LOGGER_NAME = "folio"
ANSI_RESET = "\033[0m"

# level -> (emoji, ansi colour, rich style)
LEVEL_STYLES: Dict[int, tuple[str, str, str]] = {
    logging.DEBUG: ("🐛", "\033[36m", "bright_cyan"),
    logging.INFO: ("ℹ️", "\033[32m", "green"),
    logging.WARNING: ("⚠️", "\033[33m", "yellow"),
    logging.ERROR: ("❌", "\033[31m", "red"),
    logging.CRITICAL: ("💥", "\033[95m", "bold magenta"),
}

CONSOLE_FORMAT = "%(asctime)s %(level_emoji)s %(level_color)s%(levelname)s" + ANSI_RESET + " %(name)s: %(message)s"
FILE_FORMAT = "%(asctime)s %(level_emoji)s [%(levelname)s] %(name)s: %(message)s"

_base_record_factory = logging.getLogRecordFactory()


def _record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
    record = _base_record_factory(*args, **kwargs)
    emoji, ansi, _ = LEVEL_STYLES.get(record.levelno, LEVEL_STYLES[logging.INFO])
    record.level_emoji = emoji  # type: ignore[attr-defined]
    record.level_color = ansi  # type: ignore[attr-defined]
    return record


logging.setLogRecordFactory(_record_factory)


class FolioRichHandler(RichHandler):
    """Rich console handler whose level column starts with the level emoji."""

    def get_level_text(self, record: logging.LogRecord) -> Text:  # type: ignore[override]
        emoji, _, style = LEVEL_STYLES.get(record.levelno, LEVEL_STYLES[logging.INFO])
        return Text(f"{emoji} {record.levelname}", style=style)


class FolioLogger(logging.Logger):
    rich_enabled: bool = False
    log_file: Optional[Path] = None


def _normalize_level(value: Any) -> str:
    if isinstance(value, int):
        name = logging.getLevelName(value)
        return name if not name.startswith("Level ") else "INFO"
    if isinstance(value, str) and value.strip().upper() in logging._nameToLevel:  # type: ignore[attr-defined]
        return value.strip().upper()
    return "INFO"


def _wants_rich(value: Any) -> bool:
    """``use_rich`` accepts booleans or yes/no style strings; anything else means auto (on)."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "0", "off"}:
        return False
    return True


def setup_logging(
    level: str | int | None = None,
    use_rich: Optional[bool | str] = None,
    log_dir: Optional[Path | str] = None,
    file_prefix: Optional[str] = None,
) -> FolioLogger:
    """
    Configure and return the ``folio`` logger.

    Handlers are rebuilt on each call, so calling it again applies new settings.

    Args:
        level: Logging level name or number (INFO if unset or unknown).
        use_rich: Enable or disable the Rich console handler. None means on.
        log_dir: Directory for a per-run log file. No file is written when omitted.
        file_prefix: Prefix for the log filename (defaults to ``folio``).
    """
    resolved_level = _normalize_level(level)

    logging.setLoggerClass(FolioLogger)
    logger = cast(FolioLogger, logging.getLogger(BASE_LOGGER_NAME))
    logger.setLevel(resolved_level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    console: logging.Handler
    logger.rich_enabled = _wants_rich(use_rich)
    if logger.rich_enabled:
        console = FolioRichHandler(rich_tracebacks=True, markup=False, show_path=False, log_time_format="[%X]")
    else:
        console = logging.StreamHandler(sys.stdout)
        console.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt="%H:%M:%S"))
    logger.addHandler(console)

    logger.log_file = None
    if log_dir:
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file = ensure_dir(log_dir) / f"{file_prefix or BASE_LOGGER_NAME}_{timestamp}.log"
        file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(file_handler)
        logger.log_file = log_file

    logger.propagate = False
    logger._initialized = True  # type: ignore[attr-defined]
    logger.debug(f"Logger initialized at level {resolved_level} (Rich={'ON' if logger.rich_enabled else 'OFF'})")
    if logger.log_file is not None:
        logger.info(f"📄 Log file created at: {logger.log_file.resolve()}")
    return logger


def get_logger(name: str = BASE_LOGGER_NAME) -> FolioLogger:
    """Return ``folio`` or one of its children; output stays silent until setup_logging runs."""

    logging.setLoggerClass(FolioLogger)
    base = cast(FolioLogger, logging.getLogger(BASE_LOGGER_NAME))
    if not getattr(base, "_initialized", False) and not base.handlers:
        base.addHandler(logging.NullHandler())

    if not name or name == BASE_LOGGER_NAME:
        return base
    return cast(FolioLogger, base.getChild(name))
