"""Small formatting helpers shared by the CLI and the TUI."""

from __future__ import annotations

import string


def format_bytes(num_bytes: int | float) -> str:
    """Convert bytes to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if abs(num_bytes) < 1024.0:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024.0
    return f"{num_bytes:.1f} TB"


def truncate_path(path: str | None, max_length: int = 60) -> str:
    """Shorten *path* from the left so that it fits in *max_length* characters.

    The filename is always kept whole, even if it alone is longer than
    *max_length*.
    """
    if not path:
        return ""
    if len(path) <= max_length:
        return path
    filename = path.rsplit("/", 1)[-1]
    room = max_length - len(filename) - 4
    if room <= 0:
        return f".../{filename}"
    head = path[: -len(filename) - 1]
    return f"...{head[-room:]}/{filename}"


def slot_label(index: int) -> str:
    """Letter used to identify the document at *index* (A, B, C, ...)."""
    return string.ascii_uppercase[index % 26]
