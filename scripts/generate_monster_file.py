"""Write a large Parquet file with many row groups and pages.

Useful for checking that the inspector stays responsive and that page rows
shrink sensibly when a column chunk holds hundreds of pages.
"""

import random
import time
from datetime import datetime
from pathlib import Path

import pyarrow as pa
import pyarrow.parquet as pq

OUTPUT = Path("monster.parquet")
NUM_ROW_GROUPS = 20
ROWS_PER_GROUP = 200_000


def monster_batch(count: int) -> pa.Table:
    rows = []
    for _ in range(count):
        rid = random.randint(0, 1000000)
        rows.append({
            "id": rid,
            "data": f"data-{rid}",
            "category": random.choice(["a", "b", "c", None]),
            "ts": datetime.now(),
        })
    return pa.Table.from_pylist(rows)


def main():
    print(f"Writing {NUM_ROW_GROUPS} row groups of {ROWS_PER_GROUP:,} rows to {OUTPUT} ...")
    start_time = time.time()

    first = monster_batch(ROWS_PER_GROUP)
    with pq.ParquetWriter(OUTPUT, first.schema, compression="zstd", data_page_size=8192) as writer:
        writer.write_table(first, row_group_size=ROWS_PER_GROUP)
        for i in range(1, NUM_ROW_GROUPS):
            writer.write_table(monster_batch(ROWS_PER_GROUP), row_group_size=ROWS_PER_GROUP)
            print(f"Row group {i + 1}/{NUM_ROW_GROUPS} written ({time.time() - start_time:.1f}s)")

    print(f"Done! {OUTPUT.absolute()}")
    print("Try:")
    print(f"  parquet-probe info {OUTPUT}")
    print(f"  parquet-probe tui {OUTPUT} --column 1")


if __name__ == "__main__":
    main()
