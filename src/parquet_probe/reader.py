"""Page source backed by real Parquet files.

The footer is parsed with pyarrow.  pyarrow does not expose individual
pages, so the page headers of a column chunk are decoded straight from
the file with the thrift compact protocol, skipping over each page body.
"""

from __future__ import annotations

import io
import logging
from dataclasses import dataclass
from typing import Any, BinaryIO, Callable, Iterator, Protocol, Sequence

import pyarrow as pa
import pyarrow.parquet as pq
from thrift.protocol.TCompactProtocol import TCompactProtocol
from thrift.protocol.TProtocol import TProtocolException
from thrift.Thrift import TType
from thrift.transport.TTransport import TFileObjectTransport, TTransportException

from parquet_probe.errors import FatalError, RecoverableError
from parquet_probe.pages import (
    DataPage,
    DataPageV2,
    DictionaryPage,
    Encoding,
    Page,
    PageStatistics,
)

log = logging.getLogger(__name__)

# PageType values from parquet.thrift
DATA_PAGE = 0
INDEX_PAGE = 1
DICTIONARY_PAGE = 2
DATA_PAGE_V2 = 3

Bounds = tuple[int, list[int]]


class PageSource(Protocol):
    """What a Document needs from whatever supplies its pages."""

    def open(self, path: str) -> Any: ...

    def get_bounds(self, handle: Any) -> Bounds: ...

    def get_pages(self, handle: Any, row_group: int, column: int) -> Sequence[Page]: ...

    def close(self, handle: Any) -> None: ...


@dataclass
class ParquetHandle:
    """An open Parquet file and its parsed footer."""

    path: str
    fileobj: BinaryIO
    metadata: pq.FileMetaData


# ─── thrift decoding ──────────────────────────────────────────

FieldReaders = dict[int, tuple[int, Callable[[TCompactProtocol], Any]]]


def _read_struct(proto: TCompactProtocol, fields: FieldReaders) -> dict[int, Any]:
    """Read one struct, keeping the field ids listed in *fields* and skipping the rest."""
    values: dict[int, Any] = {}
    proto.readStructBegin()
    while True:
        _, ftype, fid = proto.readFieldBegin()
        if ftype == TType.STOP:
            break
        spec = fields.get(fid)
        if spec is not None and spec[0] == ftype:
            values[fid] = spec[1](proto)
        elif ftype == TType.STRING:
            # min/max statistics are raw bytes, never text
            proto.readBinary()
        elif ftype == TType.STRUCT:
            _read_struct(proto, {})
        else:
            proto.skip(ftype)
        proto.readFieldEnd()
    proto.readStructEnd()
    return values


def _struct(fields: FieldReaders) -> tuple[int, Callable[[TCompactProtocol], Any]]:
    return TType.STRUCT, lambda proto: _read_struct(proto, fields)


_I32 = (TType.I32, TCompactProtocol.readI32)
_I64 = (TType.I64, TCompactProtocol.readI64)
_BOOL = (TType.BOOL, TCompactProtocol.readBool)

_STATISTICS: FieldReaders = {3: _I64, 4: _I64}

_DATA_PAGE_HEADER: FieldReaders = {1: _I32, 2: _I32, 5: _struct(_STATISTICS)}

_DICTIONARY_PAGE_HEADER: FieldReaders = {1: _I32, 2: _I32, 3: _BOOL}

_DATA_PAGE_HEADER_V2: FieldReaders = {
    1: _I32,
    2: _I32,
    3: _I32,
    4: _I32,
    8: _struct(_STATISTICS),
}

_PAGE_HEADER: FieldReaders = {
    1: _I32,
    2: _I32,
    3: _I32,
    5: _struct(_DATA_PAGE_HEADER),
    7: _struct(_DICTIONARY_PAGE_HEADER),
    8: _struct(_DATA_PAGE_HEADER_V2),
}


def _encoding(value: int) -> Encoding:
    try:
        return Encoding(value)
    except ValueError:
        raise RecoverableError(f"unknown page encoding {value}") from None


def _statistics(fields: dict[int, Any] | None) -> PageStatistics | None:
    if fields is None:
        return None
    return PageStatistics(null_count=fields.get(3), distinct_count=fields.get(4))


def _require(fields: dict[int, Any], fid: int, what: str) -> Any:
    if fid not in fields:
        raise RecoverableError(f"page header is missing {what}")
    return fields[fid]


def _to_page(header: dict[int, Any]) -> Page | None:
    """Convert a decoded PageHeader into a Page, or None for page types we skip."""
    page_type = _require(header, 1, "type")
    byte_length = _require(header, 2, "uncompressed_page_size")

    if page_type == DATA_PAGE:
        body = _require(header, 5, "data_page_header")
        return DataPage(
            byte_length=byte_length,
            encoding=_encoding(_require(body, 2, "encoding")),
            num_values=_require(body, 1, "num_values"),
            statistics=_statistics(body.get(5)),
        )
    if page_type == DATA_PAGE_V2:
        body = _require(header, 8, "data_page_header_v2")
        return DataPageV2(
            byte_length=byte_length,
            encoding=_encoding(_require(body, 4, "encoding")),
            num_values=_require(body, 1, "num_values"),
            num_nulls=_require(body, 2, "num_nulls"),
            num_rows=_require(body, 3, "num_rows"),
            statistics=_statistics(body.get(8)),
        )
    if page_type == DICTIONARY_PAGE:
        body = _require(header, 7, "dictionary_page_header")
        return DictionaryPage(
            byte_length=byte_length,
            encoding=_encoding(_require(body, 2, "encoding")),
            num_values=_require(body, 1, "num_values"),
            is_sorted=bool(body.get(3, False)),
        )
    if page_type == INDEX_PAGE:
        return None
    raise RecoverableError(f"unknown page type {page_type}")


def iter_page_headers(fileobj: BinaryIO, start: int, end: int) -> Iterator[dict[int, Any]]:
    """Yield the decoded page headers found between byte offsets *start* and *end*."""
    fileobj.seek(start)
    while fileobj.tell() < end:
        proto = TCompactProtocol(TFileObjectTransport(fileobj))
        header = _read_struct(proto, _PAGE_HEADER)
        body_size = _require(header, 3, "compressed_page_size")
        body_start = fileobj.tell()
        if body_size < 0 or body_start + body_size > end:
            raise RecoverableError(
                f"page at offset {body_start} claims {body_size} bytes, "
                f"outside the column chunk ending at {end}"
            )
        yield header
        fileobj.seek(body_size, io.SEEK_CUR)


def _chunk_range(column: pq.ColumnChunkMetaData) -> tuple[int, int]:
    start = column.data_page_offset
    dict_offset = column.dictionary_page_offset
    if column.has_dictionary_page and dict_offset and dict_offset < start:
        start = dict_offset
    return start, start + column.total_compressed_size


# ─── page source ──────────────────────────────────────────────


class ParquetPageSource:
    """Reads footers and page lists from Parquet files on local disk."""

    def open(self, path: str) -> ParquetHandle:
        try:
            fileobj = open(path, "rb")  # noqa: SIM115
        except FileNotFoundError:
            raise FatalError(path, "file does not exist") from None
        except OSError as exc:
            raise FatalError(path, f"could not open file ({exc.strerror or exc})") from None
        try:
            metadata = pq.read_metadata(fileobj)
        except (pa.ArrowException, OSError) as exc:
            fileobj.close()
            raise FatalError(path, f"not a valid Parquet file ({exc})") from None
        log.debug(
            "opened %s: %d row groups, %d columns",
            path,
            metadata.num_row_groups,
            metadata.num_columns,
        )
        return ParquetHandle(path=path, fileobj=fileobj, metadata=metadata)

    def get_bounds(self, handle: ParquetHandle) -> Bounds:
        md = handle.metadata
        return md.num_row_groups, [md.row_group(i).num_columns for i in range(md.num_row_groups)]

    def get_pages(self, handle: ParquetHandle, row_group: int, column: int) -> list[Page]:
        md = handle.metadata
        if not 0 <= row_group < md.num_row_groups:
            raise RecoverableError(
                f"row group {row_group} out of range (file has {md.num_row_groups})"
            )
        rg = md.row_group(row_group)
        if not 0 <= column < rg.num_columns:
            raise RecoverableError(
                f"column {column} out of range (row group {row_group} has {rg.num_columns})"
            )
        start, end = _chunk_range(rg.column(column))

        pages: list[Page] = []
        try:
            for header in iter_page_headers(handle.fileobj, start, end):
                page = _to_page(header)
                if page is not None:
                    pages.append(page)
        except (TProtocolException, TTransportException, EOFError) as exc:
            raise RecoverableError(
                f"malformed page header in row group {row_group}, column {column}: {exc}"
            ) from None
        except OSError as exc:
            raise RecoverableError(f"could not read {handle.path}: {exc}") from None
        return pages

    def close(self, handle: ParquetHandle) -> None:
        handle.fileobj.close()
