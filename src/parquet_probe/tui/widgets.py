"""Widgets for the parquet-probe TUI."""

from __future__ import annotations

from typing import Any

from rich.style import Style
from rich.text import Text
from textual.widget import Widget

from parquet_probe.layout import PanelLayout, Rect, ScreenLayout, compute_layout
from parquet_probe.pages import page_label, page_text
from parquet_probe.session import Session
from parquet_probe.tui.canvas import Canvas

APP_NAME = "parquet-probe"


class ProbeView(Widget):
    """Paints the header and one panel per document from the computed layout.

    The widget holds no state of its own: every render recomputes the layout
    from the current size and session, so a resize is just a repaint.
    """

    def __init__(self, session: Session, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.session = session

    def render(self) -> Text:
        width, height = self.size
        canvas = Canvas(width, height, console=self.app.console)
        screen = compute_layout(Rect(0, 0, width, height), self.session)
        self._paint_header(canvas, screen)
        for panel in screen.panels:
            self._paint_panel(canvas, panel)
        return canvas.to_text()

    def _paint_header(self, canvas: Canvas, screen: ScreenLayout) -> None:
        frame = Style(color="white", bgcolor="black")
        canvas.fill(screen.header, frame)
        canvas.border(screen.header, frame, f" {APP_NAME} ", frame + Style(bold=True))
        inner = screen.header.inner()
        for i, doc in enumerate(self.session.documents):
            if i >= inner.height:
                break
            palette = self.session.palette(i)
            line = Rect(inner.x, inner.y + i, inner.width, 1)
            canvas.write(
                line,
                f"File {self.session.label(i)}: {doc.path}",
                Style(color=palette.c100, bgcolor=palette.c900),
                wrap=False,
            )

    def _paint_panel(self, canvas: Canvas, panel: PanelLayout) -> None:
        i = panel.document
        doc = self.session.documents[i]
        palette = self.session.palette(i)
        edge = Style(color=palette.c100)

        title = (
            f"   File:{self.session.label(i)} Row Group: {doc.row_group} "
            f"Column: {doc.column} Pages:{len(doc.pages)}  "
        )
        title_style = edge + Style(bold=True)
        if i == self.session.focused:
            title_style += Style(bgcolor=palette.c900)
        canvas.border(panel.area, edge, title, title_style)

        shades = (palette.c950, palette.c800)
        for row in panel.rows:
            if row.area.height <= 0:
                continue
            page = doc.pages[row.index]
            label_style = Style(color=palette.c100, bgcolor=shades[row.index % len(shades)])
            canvas.fill(row.label, label_style)
            canvas.write(row.label, page_label(row.index, page), label_style)
            canvas.write(row.content, page_text(page), Style())
