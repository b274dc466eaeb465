"""Low-level shared utilities for Folio Tools."""

from .logging import get_logger, setup_logging, FolioLogger

__all__ = [
    "get_logger",
    "setup_logging",
    "FolioLogger",
]
