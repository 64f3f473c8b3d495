"""Write the demo Parquet files into a directory for manual testing.

Usage: python dev/scripts/make_sample_files.py [DIRECTORY]
"""

import sys
from pathlib import Path

from parquet_probe.demo import create_demo_files


def main():
    target = Path(sys.argv[1]) if len(sys.argv) > 1 else Path("samples")
    target.mkdir(parents=True, exist_ok=True)

    print(f"Writing sample files to {target} …")
    _, files = create_demo_files(target)

    print()
    for path in files:
        print(f"  {path.name:<30s} {path.stat().st_size:,} bytes")

    print(f"\nDone, wrote {len(files)} files.")
    print()
    print("Try:")
    print(f"  parquet-probe tui {' '.join(str(p) for p in files)}")
    print(f"  parquet-probe pages {files[0]} --column 2")


if __name__ == "__main__":
    main()
