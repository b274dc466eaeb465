"""Directory indexing and project renaming tools."""

from .indexer import write_index  # noqa: F401
from .renamer import change_project_name  # noqa: F401

__all__ = ["write_index", "change_project_name"]
