"""Name configuration modal screen."""

from __future__ import annotations

from typing import Callable

from rich.text import Text
from textual.app import ComposeResult
from textual.containers import Container
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Static

from momo_order.store import OrderBook


class NameConfigModal(ModalScreen[None]):
    """Centered modal to add, remove and set soy sauce defaults for known names."""

    BINDINGS = [
        ("escape", "close", "Close"),
        ("q", "close", "Close"),
        ("j", "move_cursor(1)", "Next"),
        ("k", "move_cursor(-1)", "Previous"),
        ("up", "move_cursor(-1)", "Previous"),
        ("down", "move_cursor(1)", "Next"),
        ("enter", "toggle_current", "Toggle"),
        ("space", "toggle_current", "Toggle"),
        ("x", "remove_current", "Remove"),
        ("delete", "remove_current", "Remove"),
    ]

    CSS = """
    NameConfigModal {
        align: center middle;
        background: $background 60%;
    }

    #names-dialog {
        width: 56;
        height: auto;
        border: round $secondary;
        background: $panel;
        padding: 1 2;
    }

    #names-title {
        text-style: bold;
        margin-bottom: 1;
        color: white;
    }

    #names-body {
        margin-bottom: 1;
        color: white;
    }

    #names-help {
        margin-top: 1;
        color: #dddddd;
    }
    """

    cursor_index = reactive(0)
    _ADD_FACTORY_KIND = "add_factory"
    _CONFIG_KIND = "config"

    def __init__(self, book: OrderBook, on_change: Callable[[], None]) -> None:
        super().__init__()
        self.book = book
        self.on_change = on_change
        self.typing_name = False
        self.name_input_value = ""

    def compose(self) -> ComposeResult:
        with Container(id="names-dialog"):
            yield Static("Name Configuration", id="names-title")
            yield Static(id="names-body")
            yield Static(id="names-help")

    def on_mount(self) -> None:
        self._refresh_content()

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        # Typing mode owns every key.
        return not self.typing_name

    def on_key(self, event: Key) -> None:
        if not self.typing_name:
            return

        if event.key == "escape":
            self.typing_name = False
            self.name_input_value = ""
            self._refresh_content()
            event.stop()
            return

        if event.key == "enter":
            self._confirm_new_name()
            event.stop()
            return

        if event.key == "backspace":
            if self.name_input_value:
                self.name_input_value = self.name_input_value[:-1]
            self._refresh_content()
            event.stop()
            return

        if event.is_printable and event.character:
            self.name_input_value += event.character
            self._refresh_content()
            event.stop()
            return

        # Swallow navigation keys while typing.
        event.stop()

    def action_close(self) -> None:
        if self.typing_name:
            self.typing_name = False
            self.name_input_value = ""
            self._refresh_content()
            return
        self.dismiss()

    def action_move_cursor(self, delta: int) -> None:
        if self.typing_name:
            return
        rows = self._rows()
        self.cursor_index = (self.cursor_index + delta) % len(rows)
        self._refresh_content()

    def action_toggle_current(self) -> None:
        row_kind, row_value = self._rows()[self.cursor_index]

        if row_kind == self._ADD_FACTORY_KIND:
            self.typing_name = True
            self.name_input_value = ""
            self._refresh_content()
            return

        config = self.book.name_config_for(row_value)
        if config is not None:
            self.book.update_name_preference(config.name, not config.default_soy_sauce)
            self.on_change()
        self._refresh_content()

    def action_remove_current(self) -> None:
        if self.typing_name:
            return
        row_kind, row_value = self._rows()[self.cursor_index]
        if row_kind != self._CONFIG_KIND:
            return
        if self.book.remove_name_config(row_value):
            self.on_change()
        self._refresh_content()

    def _rows(self) -> list[tuple[str, str]]:
        rows = [(self._CONFIG_KIND, config.name) for config in self.book.name_configs]
        rows.append((self._ADD_FACTORY_KIND, "Add name"))
        return rows

    def _confirm_new_name(self) -> None:
        normalized = self.name_input_value.strip()
        self.typing_name = False
        self.name_input_value = ""
        if normalized and self.book.add_name_config(normalized, default_soy_sauce=True):
            self.on_change()
        self.cursor_index = len(self._rows()) - 1
        self._refresh_content()

    def _refresh_content(self) -> None:
        body = self.query_one("#names-body", Static)
        help_text = self.query_one("#names-help", Static)

        rows = self._rows()
        if self.cursor_index >= len(rows):
            self.cursor_index = len(rows) - 1

        content = Text(style="white")
        for idx, (row_kind, row_value) in enumerate(rows):
            if idx > 0:
                content.append("\n")
            pointer = "➤ " if idx == self.cursor_index else "  "
            if row_kind == self._CONFIG_KIND:
                config = self.book.name_config_for(row_value)
                soy = config is not None and config.default_soy_sauce
                checked = "[x]" if soy else "[ ]"
                content.append(f"{pointer}{checked} {row_value}", style="bold white" if soy else "white")
                content.append("  default soy sauce", style="dim")
            elif self.typing_name and idx == self.cursor_index:
                content.append(f"{pointer}+ New name: {self.name_input_value}|", style="bold white")
            else:
                content.append(f"{pointer}+ {row_value}", style="white")

        if self.typing_name:
            help_text.update("Type a name, Enter confirm, Esc cancel typing")
        else:
            help_text.update("J/K/↑/↓ move, Enter/Space toggle soy default or add, X/Del remove, Esc/q close")
        body.update(content)
