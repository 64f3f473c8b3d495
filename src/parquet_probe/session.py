"""The set of open documents, which one has focus, and the shared layout scale."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from parquet_probe.document import Document
from parquet_probe.errors import FatalError, ProbeError
from parquet_probe.reader import PageSource
from parquet_probe.utils import slot_label

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Palette:
    """A colour theme; shade names follow the tailwind scale."""

    name: str
    c100: str
    c800: str
    c900: str
    c950: str


PALETTES: tuple[Palette, ...] = (
    Palette("orange", c100="#ffedd5", c800="#9a3412", c900="#7c2d12", c950="#431407"),
    Palette("pink", c100="#fce7f3", c800="#9d174d", c900="#831843", c950="#500724"),
    Palette("purple", c100="#f3e8ff", c800="#6b21a8", c900="#581c87", c950="#3b0764"),
    Palette("violet", c100="#ede9fe", c800="#5b21b6", c900="#4c1d95", c950="#2e1065"),
    Palette("sky", c100="#e0f2fe", c800="#075985", c900="#0c4a6e", c950="#082f49"),
)

MAX_DOCUMENTS = len(PALETTES)


class Command(Enum):
    """Navigation commands understood by the session."""

    QUIT = "quit"
    NEXT_ROW_GROUP = "next_row_group"
    PREV_ROW_GROUP = "prev_row_group"
    NEXT_COLUMN = "next_column"
    PREV_COLUMN = "prev_column"
    CYCLE_FOCUS = "cycle_focus"


class Session:
    """Owns every open Document for the lifetime of the process.

    Use :meth:`open` to build one from paths; the constructor takes documents
    that are already positioned.
    """

    def __init__(self, documents: Sequence[Document]) -> None:
        if not documents:
            raise ValueError("a session needs at least one document")
        if len(documents) > MAX_DOCUMENTS:
            raise ValueError(f"at most {MAX_DOCUMENTS} files can be compared at once")
        self.documents: list[Document] = list(documents)
        self.palettes: tuple[Palette, ...] = PALETTES[: len(self.documents)]
        self.focused = 0
        self.global_scale = 1
        self.recompute_scale()

    @classmethod
    def open(
        cls,
        source: PageSource,
        paths: Sequence[str],
        row_group: int = 0,
        column: int = 0,
    ) -> Session:
        """Open every path at the same starting selection.

        Raises :class:`FatalError` if any file cannot be opened or does not
        have the requested row group and column; files opened so far are
        closed again.
        """
        if not paths:
            raise FatalError("<none>", "no files given")
        if len(paths) > MAX_DOCUMENTS:
            raise FatalError(
                ", ".join(paths[MAX_DOCUMENTS:]),
                f"at most {MAX_DOCUMENTS} files can be compared at once",
            )
        documents: list[Document] = []
        try:
            for path in paths:
                doc = Document(source, path)
                documents.append(doc)
                try:
                    doc.select(row_group, column)
                except ProbeError as exc:
                    raise FatalError(path, str(exc)) from None
        except FatalError:
            for doc in documents:
                doc.close()
            raise
        log.info("session opened with %d documents", len(documents))
        return cls(documents)

    @property
    def focused_document(self) -> Document:
        return self.documents[self.focused]

    def label(self, index: int) -> str:
        return slot_label(index)

    def palette(self, index: int) -> Palette:
        return self.palettes[index]

    def cycle_focus(self) -> None:
        self.focused = (self.focused + 1) % len(self.documents)

    def recompute_scale(self) -> None:
        """Largest total page size across documents, floored at 1 so it can divide."""
        self.global_scale = max(max(doc.total_bytes for doc in self.documents), 1)

    def apply_to_focused(self, command: Command) -> bool:
        """Run a navigation command against the focused document.

        Returns whether the selection changed.  A :class:`RecoverableError`
        from the fetch propagates with the document untouched.
        """
        doc = self.focused_document
        if command is Command.NEXT_ROW_GROUP:
            moved = doc.move_row_group(1)
        elif command is Command.PREV_ROW_GROUP:
            moved = doc.move_row_group(-1)
        elif command is Command.NEXT_COLUMN:
            moved = doc.move_column(1)
        elif command is Command.PREV_COLUMN:
            moved = doc.move_column(-1)
        else:
            raise ValueError(f"{command} is not a navigation command")
        self.recompute_scale()
        return moved

    def close(self) -> None:
        for doc in self.documents:
            doc.close()
