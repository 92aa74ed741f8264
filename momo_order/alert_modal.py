"""Blocking alert modal screen."""

from __future__ import annotations

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.screen import ModalScreen
from textual.widgets import Static


class AlertModal(ModalScreen[None]):
    """Show a message until the user acknowledges it."""

    CSS = """
    AlertModal {
        align: center middle;
        background: $background 60%;
    }

    #alert-dialog {
        width: 60;
        height: auto;
        border: round $error;
        background: $panel;
        padding: 1 2;
    }

    #alert-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #alert-message {
        color: #ffb3b3;
        margin-bottom: 1;
    }

    #alert-help {
        color: #dddddd;
    }
    """

    def __init__(self, title: str, message: str) -> None:
        super().__init__()
        self.title_text = title
        self.message = message

    def compose(self) -> ComposeResult:
        with Container(id="alert-dialog"):
            yield Static(self.title_text, id="alert-title")
            yield Static(Text(self.message), id="alert-message")
            yield Static("Enter/Esc to dismiss", id="alert-help")

    def on_key(self, event: Key) -> None:
        if event.key in {"enter", "escape", "q"}:
            self.dismiss()
            event.stop()
