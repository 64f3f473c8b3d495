"""Exception types shared across parquet-probe."""

from __future__ import annotations


class ProbeError(Exception):
    """Base class for errors raised while inspecting files."""


class FatalError(ProbeError):
    """A file could not be opened or parsed at startup."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"{path}: {reason}")
        self.path = path
        self.reason = reason


class RecoverableError(ProbeError):
    """A selection could not be loaded; the previous one stays valid."""
