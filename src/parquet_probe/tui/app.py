"""parquet-probe interactive terminal UI."""

from __future__ import annotations

from pathlib import Path

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Footer

from parquet_probe.router import KEYMAP, InputRouter
from parquet_probe.session import Session
from parquet_probe.tui.widgets import APP_NAME, ProbeView

CSS_PATH = Path(__file__).parent / "app.tcss"


class ProbeApp(App):
    """Side-by-side page layout of one row group / column across files."""

    TITLE = APP_NAME
    SUB_TITLE = "Parquet page inspector"
    CSS_PATH = CSS_PATH

    # priority so that tab and the arrows reach the router before focus handling
    BINDINGS = [  # noqa: RUF012
        Binding(key, f"navigate('{key}')", description, show=key != "escape", priority=True)
        for key, (_command, description) in KEYMAP.items()
    ]

    def __init__(self, session: Session, **kwargs) -> None:
        super().__init__(**kwargs)
        self.session = session
        self.router = InputRouter(session, on_error=self._report_error)

    def compose(self) -> ComposeResult:
        yield ProbeView(self.session, id="probe")
        yield Footer()

    def _report_error(self, message: str) -> None:
        self.notify(message, title="Selection unchanged", severity="warning")

    def action_navigate(self, key: str) -> None:
        if not self.router.handle(key):
            self.exit()
            return
        self.query_one(ProbeView).refresh()

    def on_key(self, event: events.Key) -> None:
        # unbound keys change nothing but still repaint
        self.query_one(ProbeView).refresh()
