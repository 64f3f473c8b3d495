"""A grid of styled cells that the view paints rectangles into."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.style import Style
from rich.text import Text

from parquet_probe.layout import Rect


class Canvas:
    """Fixed-size character grid; anything drawn outside it is clipped.

    Text is wrapped and aligned by rich, and borders use rich box characters,
    so painting a rectangle is just copying rendered segments into cells.
    """

    def __init__(
        self,
        width: int,
        height: int,
        style: Style | None = None,
        *,
        console: Console | None = None,
        frame: box.Box = box.SQUARE,
    ) -> None:
        self.width = max(width, 0)
        self.height = max(height, 0)
        self.console = console or Console()
        self.frame = frame
        blank = style or Style()
        self._chars = [[" "] * self.width for _ in range(self.height)]
        self._styles = [[blank] * self.width for _ in range(self.height)]

    def put(self, x: int, y: int, text: str, style: Style) -> None:
        if not 0 <= y < self.height:
            return
        for offset, char in enumerate(text):
            cx = x + offset
            if 0 <= cx < self.width:
                self._chars[y][cx] = char
                self._styles[y][cx] = style

    def put_text(self, x: int, y: int, text: Text) -> None:
        """Copy one line of styled rich text into the grid."""
        for segment in text.render(self.console, end=""):
            self.put(x, y, segment.text, segment.style or Style())
            x += len(segment.text)

    def fill(self, rect: Rect, style: Style) -> None:
        for y in range(max(rect.y, 0), min(rect.bottom, self.height)):
            self.put(rect.x, y, " " * rect.width, style)

    def write(self, rect: Rect, text: str, style: Style, *, wrap: bool = True) -> None:
        """Write *text* inside *rect*, wrapping at its width and dropping lines that do not fit."""
        if rect.width <= 0 or rect.height <= 0:
            return
        content = Text(text, style=style)
        if wrap:
            lines = list(content.wrap(self.console, rect.width))
        else:
            content.truncate(rect.width)
            lines = [content]
        for i, line in enumerate(lines[: rect.height]):
            line.rstrip()
            line.truncate(rect.width)
            self.put_text(rect.x, rect.y + i, line)

    def border(
        self,
        rect: Rect,
        style: Style,
        title: str = "",
        title_style: Style | None = None,
    ) -> None:
        """Draw a box around *rect* with *title* centred on the top edge."""
        if rect.width < 2 or rect.height < 2:
            return
        inner = rect.width - 2
        top = Text(style=style)
        top.append(title[:inner], title_style or style)
        top.align("center", inner, character=self.frame.top)
        edge = Text(self.frame.top_left, style) + top + Text(self.frame.top_right, style)
        self.put_text(rect.x, rect.y, edge)
        self.put(rect.x, rect.bottom - 1, self.frame.get_bottom([inner]), style)
        for y in range(rect.y + 1, rect.bottom - 1):
            self.put(rect.x, y, self.frame.mid_left, style)
            self.put(rect.right - 1, y, self.frame.mid_right, style)

    def to_text(self) -> Text:
        """Collapse the grid into a rich Text, one span per run of equal style."""
        text = Text(no_wrap=True, overflow="crop")
        for y in range(self.height):
            chars, styles = self._chars[y], self._styles[y]
            start = 0
            for x in range(1, self.width + 1):
                if x == self.width or styles[x] != styles[start]:
                    text.append("".join(chars[start:x]), style=styles[start])
                    start = x
            if y < self.height - 1:
                text.append("\n")
        return text
