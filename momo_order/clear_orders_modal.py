"""Clear-all confirmation modal screen."""

from __future__ import annotations

from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class ClearOrdersModal(ModalScreen[bool]):
    """Ask before wiping the whole order list."""

    CSS = """
    ClearOrdersModal {
        align: center middle;
        background: $background 60%;
    }

    #clear-dialog {
        width: 56;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #clear-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #clear-prompt {
        color: white;
        margin-bottom: 1;
    }

    #clear-help {
        color: #dddddd;
    }
    """

    def __init__(self, order_count: int) -> None:
        super().__init__()
        self.order_count = order_count

    def compose(self) -> ComposeResult:
        with Container(id="clear-dialog"):
            yield Static("Clear All Orders", id="clear-title")
            yield Static(
                f"Are you sure you want to clear all {self.order_count} orders?",
                id="clear-prompt",
            )
            yield Static("Y/Enter clear all. N/Esc/q cancel.", id="clear-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"escape", "q", "n"}:
            self.dismiss(False)
            event.stop()
            return

        if event.key in {"enter", "y"}:
            self.dismiss(True)
            event.stop()
