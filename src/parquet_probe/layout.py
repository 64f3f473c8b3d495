"""Screen geometry for the inspector.

Everything here is a pure function of the terminal size and the session:
a header band on top, then one bordered panel per document side by side,
each split into one row per page.  Row heights are proportional to page
byte length over the session's global scale, so the same number of bytes
takes the same height in every panel.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from parquet_probe.session import Session

SPACING = 1
BORDER = 1
LABEL_PERCENT = 20


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def right(self) -> int:
        return self.x + self.width

    def inner(self, margin: int = BORDER) -> Rect:
        """The area left inside a border of *margin* cells."""
        width = max(self.width - 2 * margin, 0)
        height = max(self.height - 2 * margin, 0)
        return Rect(self.x + margin, self.y + margin, width, height)

    def contains(self, other: Rect) -> bool:
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.right <= self.right
            and other.bottom <= self.bottom
        )


@dataclass(frozen=True)
class PageRow:
    index: int
    area: Rect
    label: Rect
    content: Rect


@dataclass(frozen=True)
class PanelLayout:
    document: int
    area: Rect
    inner: Rect
    rows: list[PageRow] = field(default_factory=list)


@dataclass(frozen=True)
class ScreenLayout:
    header: Rect
    body: Rect
    panels: list[PanelLayout]


def header_height(document_count: int) -> int:
    """One line per file plus the border around them."""
    return document_count + 2 * BORDER


def split_vertical(area: Rect, top: int, spacing: int = SPACING) -> tuple[Rect, Rect]:
    """Cut *area* into a band of *top* rows and whatever remains below the gap."""
    top = min(top, area.height)
    gap = min(spacing, area.height - top)
    upper = Rect(area.x, area.y, area.width, top)
    lower = Rect(area.x, area.y + top + gap, area.width, area.height - top - gap)
    return upper, lower


def split_columns(area: Rect, count: int, spacing: int = SPACING) -> list[Rect]:
    """Split *area* into *count* side-by-side columns of equal width.

    Leftover cells from the division go one each to the leftmost columns.
    When the area is too narrow for the gaps, columns collapse to zero
    width at its right edge.
    """
    if count <= 0:
        return []
    usable = max(area.width - spacing * (count - 1), 0)
    base, extra = divmod(usable, count)
    columns: list[Rect] = []
    x = area.x
    for i in range(count):
        width = base + (1 if i < extra else 0)
        x = min(x, area.right - width)
        columns.append(Rect(x, area.y, width, area.height))
        x += width + spacing
    return columns


def proportional_heights(sizes: Sequence[int], scale: int, height: int) -> list[int]:
    """Row heights for *sizes* where *scale* bytes span the full *height*.

    Each boundary is placed at ``floor(cumulative * height / scale)``, so
    rounding never makes the rows outgrow *height* and a list whose sizes
    add up to *scale* fills it exactly.
    """
    heights: list[int] = []
    cumulative = 0
    previous = 0
    for size in sizes:
        cumulative += size
        boundary = min(cumulative * height // scale, height)
        heights.append(boundary - previous)
        previous = boundary
    return heights


def split_page_row(area: Rect) -> tuple[Rect, Rect]:
    """Label zone on the left, content zone on the right."""
    label_width = area.width * LABEL_PERCENT // 100
    gap = min(SPACING, area.width - label_width)
    label = Rect(area.x, area.y, label_width, area.height)
    content = Rect(area.x + label_width + gap, area.y, area.width - label_width - gap, area.height)
    return label, content


def layout_panel(index: int, area: Rect, sizes: Sequence[int], scale: int) -> PanelLayout:
    inner = area.inner()
    rows: list[PageRow] = []
    y = inner.y
    for page_index, height in enumerate(proportional_heights(sizes, scale, inner.height)):
        row = Rect(inner.x, y, inner.width, height)
        label, content = split_page_row(row)
        rows.append(PageRow(page_index, row, label, content))
        y += height
    return PanelLayout(document=index, area=area, inner=inner, rows=rows)


def compute_layout(area: Rect, session: Session) -> ScreenLayout:
    """Partition *area* for the current state of *session*."""
    header, body = split_vertical(area, header_height(len(session.documents)))
    panels = [
        layout_panel(
            i,
            column,
            [page.byte_length for page in doc.pages],
            session.global_scale,
        )
        for i, (doc, column) in enumerate(
            zip(session.documents, split_columns(body, len(session.documents)))
        )
    ]
    return ScreenLayout(header=header, body=body, panels=panels)
