"""Navigation state for one opened file."""

from __future__ import annotations

import logging
from typing import Any

from parquet_probe.errors import RecoverableError
from parquet_probe.pages import Page
from parquet_probe.reader import PageSource

log = logging.getLogger(__name__)


class Document:
    """One file's current row group / column selection and its cached pages.

    ``pages`` always holds the complete result of the last successful fetch
    for ``(row_group, column)``.  A failed fetch raises
    :class:`RecoverableError` and leaves both the indices and the pages as
    they were.
    """

    def __init__(self, source: PageSource, path: str) -> None:
        self.source = source
        self.path = path
        self.handle: Any = source.open(path)
        self.row_group_count, self.column_counts = source.get_bounds(self.handle)
        self.row_group = 0
        self.column = 0
        self.pages: tuple[Page, ...] = ()

    @property
    def column_count(self) -> int:
        """Number of columns in the currently selected row group."""
        if not 0 <= self.row_group < len(self.column_counts):
            return 0
        return self.column_counts[self.row_group]

    @property
    def total_bytes(self) -> int:
        return sum(page.byte_length for page in self.pages)

    def select(self, row_group: int, column: int) -> None:
        """Fetch the pages for a new selection and commit it only if the fetch succeeds."""
        pages = tuple(self.source.get_pages(self.handle, row_group, column))
        self.row_group, self.column, self.pages = row_group, column, pages
        log.debug(
            "%s: row group %d, column %d -> %d pages",
            self.path,
            row_group,
            column,
            len(pages),
        )

    def refresh(self) -> None:
        self.select(self.row_group, self.column)

    def move_row_group(self, delta: int) -> bool:
        """Step the row group by *delta*.  Returns False when the move would leave the file."""
        target = self.row_group + delta
        if not 0 <= target < self.row_group_count:
            return False
        if self.column >= self.column_counts[target]:
            raise RecoverableError(
                f"row group {target} has no column {self.column} "
                f"({self.column_counts[target]} columns)"
            )
        self.select(target, self.column)
        return True

    def move_column(self, delta: int) -> bool:
        """Step the column by *delta*.  Returns False when the move would leave the row group."""
        target = self.column + delta
        if not 0 <= target < self.column_count:
            return False
        self.select(self.row_group, target)
        return True

    def close(self) -> None:
        self.source.close(self.handle)
