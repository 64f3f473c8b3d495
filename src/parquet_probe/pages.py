"""Page records produced by a page source and their display text."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Union


class Encoding(IntEnum):
    """Parquet value encodings, numbered as in the format's thrift definition."""

    PLAIN = 0
    GROUP_VAR_INT = 1
    PLAIN_DICTIONARY = 2
    RLE = 3
    BIT_PACKED = 4
    DELTA_BINARY_PACKED = 5
    DELTA_LENGTH_BYTE_ARRAY = 6
    DELTA_BYTE_ARRAY = 7
    RLE_DICTIONARY = 8
    BYTE_STREAM_SPLIT = 9

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class PageStatistics:
    """The part of a page's statistics the inspector shows."""

    null_count: int | None = None
    distinct_count: int | None = None


@dataclass(frozen=True)
class DataPage:
    byte_length: int
    encoding: Encoding
    num_values: int
    statistics: PageStatistics | None = None


@dataclass(frozen=True)
class DataPageV2:
    byte_length: int
    encoding: Encoding
    num_values: int
    num_nulls: int
    num_rows: int
    statistics: PageStatistics | None = None


@dataclass(frozen=True)
class DictionaryPage:
    byte_length: int
    encoding: Encoding
    num_values: int
    is_sorted: bool = False


Page = Union[DataPage, DataPageV2, DictionaryPage]


def page_kind(page: Page) -> str:
    """Short name of the page variant."""
    if isinstance(page, DataPage):
        return "DataPage"
    if isinstance(page, DataPageV2):
        return "DataPageV2"
    if isinstance(page, DictionaryPage):
        return "DictionaryPage"
    raise TypeError(f"Unexpected page type: {type(page).__name__}")


def _stats_text(stats: PageStatistics) -> str:
    if stats.null_count is None:
        return "n/a"
    return f"nulls: {stats.null_count}"


def page_text(page: Page) -> str:
    """Kind-specific description shown in the content zone of a page row."""
    if isinstance(page, DataPage):
        stats = "N/A" if page.statistics is None else _stats_text(page.statistics)
        return f"DataPage [{page.encoding}], values:{page.num_values}, page stats:{stats}"
    if isinstance(page, DataPageV2):
        return "DataPageV2"
    if isinstance(page, DictionaryPage):
        sorted_flag = "true" if page.is_sorted else "false"
        return f"DictionaryPage[{page.encoding}], num_values:{page.num_values}, sorted:{sorted_flag}"
    raise TypeError(f"Unexpected page type: {type(page).__name__}")


def page_label(index: int, page: Page) -> str:
    """Text for the label zone: position in the column chunk and byte length."""
    return f"#{index} {page.byte_length}b"


def page_nulls(page: Page) -> int | None:
    """Null count reported for *page*, if the writer recorded one."""
    if isinstance(page, DataPageV2):
        return page.num_nulls
    if isinstance(page, DataPage) and page.statistics is not None:
        return page.statistics.null_count
    return None


def page_rows(page: Page) -> int | None:
    """Row count; only v2 data page headers carry one."""
    if isinstance(page, DataPageV2):
        return page.num_rows
    return None


def page_distinct(page: Page) -> int | None:
    if isinstance(page, (DataPage, DataPageV2)) and page.statistics is not None:
        return page.statistics.distinct_count
    return None
