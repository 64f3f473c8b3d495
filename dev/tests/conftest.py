"""Shared fixtures: isolated config, sample Parquet files and fake page sources."""

import pytest

import parquet_probe.config as config_module
from data_factory import FakePageSource, data_pages, dictionary_column, write_sample
from parquet_probe.config import ENV_VAR_MAP
from parquet_probe.reader import ParquetPageSource


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config module at a file that does not exist and clear env overrides."""
    config_path = tmp_path / "parquet-probe.yaml"
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_path)
    for env_key in ENV_VAR_MAP:
        monkeypatch.delenv(env_key, raising=False)
    return config_path


@pytest.fixture(scope="session")
def sample_dir(tmp_path_factory):
    return tmp_path_factory.mktemp("parquet")


@pytest.fixture(scope="session")
def dictionary_file(sample_dir):
    """Four row groups, dictionary encoding, v1 data pages."""
    return write_sample(sample_dir / "dictionary.parquet", row_group_size=250)


@pytest.fixture(scope="session")
def plain_file(sample_dir):
    """One row group, no dictionary, small v1 data pages."""
    return write_sample(
        sample_dir / "plain.parquet",
        row_group_size=1000,
        use_dictionary=False,
        data_page_size=1024,
        data_page_version="1.0",
    )


@pytest.fixture(scope="session")
def v2_file(sample_dir):
    """One row group, no dictionary, v2 data pages."""
    return write_sample(
        sample_dir / "v2.parquet",
        row_group_size=1000,
        use_dictionary=False,
        data_page_size=1024,
        data_page_version="2.0",
    )


@pytest.fixture(scope="session")
def not_parquet_file(sample_dir):
    path = sample_dir / "notes.parquet"
    path.write_text("this is not a parquet file\n" * 10)
    return str(path)


@pytest.fixture
def source():
    return ParquetPageSource()


@pytest.fixture
def fake_source():
    """Two files: 'a' with 2 row groups x 3 columns, 'b' with 1 row group x 2 columns."""
    return FakePageSource(
        {
            "a.parquet": [
                [data_pages(100, 50, 50), data_pages(400), dictionary_column(20, 30, 30)],
                [data_pages(60), data_pages(10, 10), data_pages(80, 80)],
            ],
            "b.parquet": [
                [data_pages(50, 50), data_pages(300, 100)],
            ],
        }
    )
