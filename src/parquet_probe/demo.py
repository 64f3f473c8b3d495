"""Self-contained sample files for a zero-setup walkthrough.

Writes the same orders data twice with different writer settings so the
page layouts differ visibly: one file dictionary-encoded with small v1
data pages, the other plain-encoded with larger v2 data pages.
"""

from __future__ import annotations

import random
import shutil
import tempfile
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any

import pyarrow as pa  # type: ignore[import-untyped]
import pyarrow.parquet as pq  # type: ignore[import-untyped]

_RNG = random.Random(42)
_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Hank"]
_REGIONS = ["us-east", "us-west", "eu-west", "eu-central", "ap-south"]

ORDERS_SCHEMA = pa.schema(
    [
        pa.field("order_id", pa.int64(), nullable=False),
        pa.field("customer_name", pa.string()),
        pa.field("region", pa.string()),
        pa.field("amount", pa.float64()),
        pa.field("created_at", pa.timestamp("us")),
    ]
)


def _random_ts(start: datetime, end: datetime) -> datetime:
    delta = end - start
    return start + timedelta(seconds=_RNG.randint(0, int(delta.total_seconds())))


def orders_table(num_rows: int = 5000) -> pa.Table:
    start, end = datetime(2024, 1, 1), datetime(2024, 6, 30)
    rows: list[dict[str, Any]] = []
    for oid in range(1, num_rows + 1):
        rows.append(
            {
                "order_id": oid,
                # roughly one in ten names missing so null counts show up
                "customer_name": None if _RNG.random() < 0.1 else _RNG.choice(_NAMES),
                "region": _RNG.choice(_REGIONS),
                "amount": round(_RNG.uniform(10, 999), 2),
                "created_at": _random_ts(start, end),
            }
        )
    return pa.Table.from_pylist(rows, schema=ORDERS_SCHEMA)


def create_demo_files(base_dir: Path | None = None) -> tuple[Path, list[Path]]:
    """Write the sample files.

    Returns (directory_path, [dictionary_file, plain_file]).
    """
    if base_dir is None:
        base_dir = Path(tempfile.mkdtemp(prefix="parquet-probe-demo-"))
    base_dir.mkdir(parents=True, exist_ok=True)
    _RNG.seed(42)
    table = orders_table()

    dictionary_path = base_dir / "orders_dictionary.parquet"
    pq.write_table(
        table,
        dictionary_path,
        row_group_size=2000,
        data_page_size=4096,
        use_dictionary=True,
        write_statistics=True,
    )

    plain_path = base_dir / "orders_plain_v2.parquet"
    pq.write_table(
        table,
        plain_path,
        row_group_size=2500,
        data_page_size=16384,
        use_dictionary=False,
        data_page_version="2.0",
        write_statistics=True,
    )
    return base_dir, [dictionary_path, plain_path]


def cleanup_demo(demo_dir: Path) -> None:
    """Remove demo directory."""
    shutil.rmtree(demo_dir, ignore_errors=True)
