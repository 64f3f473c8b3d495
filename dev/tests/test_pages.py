"""Per-kind page text shown in the content and label zones."""

import pytest

from parquet_probe.pages import (
    DataPage,
    DataPageV2,
    DictionaryPage,
    Encoding,
    PageStatistics,
    page_distinct,
    page_kind,
    page_label,
    page_nulls,
    page_rows,
    page_text,
)


def test_data_page_with_null_count():
    page = DataPage(
        byte_length=120,
        encoding=Encoding.PLAIN,
        num_values=10,
        statistics=PageStatistics(null_count=3),
    )
    assert page_text(page) == "DataPage [PLAIN], values:10, page stats:nulls: 3"


def test_data_page_statistics_without_null_count():
    page = DataPage(
        byte_length=120,
        encoding=Encoding.RLE_DICTIONARY,
        num_values=10,
        statistics=PageStatistics(),
    )
    assert page_text(page) == "DataPage [RLE_DICTIONARY], values:10, page stats:n/a"


def test_data_page_without_statistics():
    page = DataPage(byte_length=120, encoding=Encoding.PLAIN, num_values=10)
    assert page_text(page) == "DataPage [PLAIN], values:10, page stats:N/A"


def test_data_page_v2_marker():
    page = DataPageV2(
        byte_length=64, encoding=Encoding.PLAIN, num_values=8, num_nulls=1, num_rows=8
    )
    assert page_text(page) == "DataPageV2"


def test_dictionary_page():
    page = DictionaryPage(byte_length=40, encoding=Encoding.PLAIN, num_values=5, is_sorted=False)
    assert page_text(page) == "DictionaryPage[PLAIN], num_values:5, sorted:false"


def test_dictionary_page_sorted():
    page = DictionaryPage(byte_length=40, encoding=Encoding.PLAIN, num_values=5, is_sorted=True)
    assert page_text(page).endswith("sorted:true")


def test_page_label():
    page = DataPage(byte_length=2048, encoding=Encoding.PLAIN, num_values=1)
    assert page_label(3, page) == "#3 2048b"


def test_page_kind_and_nulls():
    v1 = DataPage(1, Encoding.PLAIN, 1, PageStatistics(null_count=0))
    v2 = DataPageV2(1, Encoding.PLAIN, 4, num_nulls=2, num_rows=4)
    dictionary = DictionaryPage(1, Encoding.PLAIN, 1)
    assert [page_kind(p) for p in (v1, v2, dictionary)] == [
        "DataPage",
        "DataPageV2",
        "DictionaryPage",
    ]
    assert page_nulls(v1) == 0
    assert page_nulls(v2) == 2
    assert page_nulls(dictionary) is None


def test_unknown_page_type_rejected():
    with pytest.raises(TypeError):
        page_text("not a page")
    with pytest.raises(TypeError):
        page_kind(object())


def test_encoding_prints_its_name():
    assert str(Encoding.DELTA_BINARY_PACKED) == "DELTA_BINARY_PACKED"
    assert Encoding(8) is Encoding.RLE_DICTIONARY


def test_rows_and_distinct_counts():
    v1 = DataPage(1, Encoding.PLAIN, 6, PageStatistics(null_count=0, distinct_count=3))
    v2 = DataPageV2(1, Encoding.PLAIN, 4, num_nulls=0, num_rows=4)
    dictionary = DictionaryPage(1, Encoding.PLAIN, 1)
    assert [page_rows(p) for p in (v1, v2, dictionary)] == [None, 4, None]
    assert [page_distinct(p) for p in (v1, v2, dictionary)] == [3, None, None]
