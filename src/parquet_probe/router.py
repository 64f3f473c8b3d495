"""Key press handling for the inspector."""

from __future__ import annotations

import logging
from typing import Callable

from parquet_probe.errors import RecoverableError
from parquet_probe.session import Command, Session

log = logging.getLogger(__name__)

# key name -> (command, footer description)
KEYMAP: dict[str, tuple[Command, str]] = {
    "q": (Command.QUIT, "Quit"),
    "escape": (Command.QUIT, "Quit"),
    "up": (Command.NEXT_ROW_GROUP, "Row group +"),
    "down": (Command.PREV_ROW_GROUP, "Row group -"),
    "left": (Command.PREV_COLUMN, "Column -"),
    "right": (Command.NEXT_COLUMN, "Column +"),
    "tab": (Command.CYCLE_FOCUS, "Next file"),
}


def route(key: str) -> Command | None:
    """Translate a key name into a command, or None for keys without one."""
    entry = KEYMAP.get(key)
    return entry[0] if entry else None


class InputRouter:
    """Applies key presses to a session.

    Recoverable errors never escape :meth:`handle`; they are passed to
    *on_error* as a readable message and the session keeps its last good
    state.
    """

    def __init__(
        self,
        session: Session,
        on_error: Callable[[str], None] | None = None,
    ) -> None:
        self.session = session
        self.on_error = on_error

    def handle(self, key: str) -> bool:
        """Apply *key*.  Returns False once the user asked to quit."""
        command = route(key)
        if command is None:
            return True
        if command is Command.QUIT:
            return False
        if command is Command.CYCLE_FOCUS:
            self.session.cycle_focus()
            return True

        doc = self.session.focused_document
        try:
            self.session.apply_to_focused(command)
        except RecoverableError as exc:
            log.warning("%s: %s rejected: %s", doc.path, command.value, exc)
            if self.on_error is not None:
                self.on_error(f"{self.session.label(self.session.focused)}: {exc}")
        return True
