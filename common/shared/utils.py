"""
common.shared.utils

Reusable helpers shared across Folio Tools modules.
"""

from __future__ import annotations

from typing import Any, Iterable, Iterator

from tqdm import tqdm


# ----------------------------------------------------------------------
# PROGRESS HELPERS
# ----------------------------------------------------------------------

class Progress:
    """
    Simple wrapper for tqdm progress bars that automatically closes
    on completion or interruption.
    """

    def __init__(self, iterable: Iterable[Any], desc: str = "Processing", total: int | None = None):
        self._tqdm = tqdm(iterable, desc=desc, total=total, leave=False, dynamic_ncols=True)

    def __iter__(self) -> Iterator[Any]:
        try:
            for item in self._tqdm:
                yield item
        finally:
            self._tqdm.close()
