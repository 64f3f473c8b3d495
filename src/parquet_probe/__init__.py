"""Side-by-side page layout inspector for Parquet files."""

__version__ = "0.1.0"
