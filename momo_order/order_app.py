"""Main Textual app class."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Callable, Sequence

from rich.text import Text
from textual import work
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical, VerticalScroll
from textual.css.query import NoMatches
from textual.events import Key
from textual.reactive import reactive
from textual.screen import ModalScreen
from textual.widgets import Button, Checkbox, Header, Input, Static

from momo_order.alert_modal import AlertModal
from momo_order.clear_orders_modal import ClearOrdersModal
from momo_order.config import CURRENCY, UNIT_PRICE
from momo_order.constant import STORAGE_KEY_NAME_CONFIGS
from momo_order.data import QUICK_ORDERS, QuickOrder, default_name_configs
from momo_order.models import Order
from momo_order.name_config_modal import NameConfigModal
from momo_order.persistence import (
    bootstrap_schema,
    has_value,
    load_name_configs,
    load_orders,
    save_name_configs,
    save_orders,
)
from momo_order.receipt import export_receipt
from momo_order.rendering import format_error, format_order_label, format_statistics
from momo_order.store import OrderBook
from momo_order.summary import summarize_orders
from momo_order.validation import FormErrors, build_order, parse_quantity, validate_order_form

logger = logging.getLogger(__name__)

ReceiptExporter = Callable[[Sequence[Order]], Path]

HELP_LINE = (
    "Tab move focus. Enter submit. Esc cancel edit. Ctrl+Z undo, Ctrl+Y redo. "
    "Ctrl+S export PDF, Ctrl+O names, Ctrl+L clear all."
)


class OrderList(Static, can_focus=True):
    """Focusable order list; selection state lives on the app."""

    BINDINGS = [
        ("j", "app.move_selection(1)", "Next order"),
        ("down", "app.move_selection(1)", "Next order"),
        ("k", "app.move_selection(-1)", "Previous order"),
        ("up", "app.move_selection(-1)", "Previous order"),
        ("e", "app.edit_selected", "Edit"),
        ("enter", "app.edit_selected", "Edit"),
        ("c", "app.duplicate_selected", "Duplicate"),
        ("d", "app.delete_selected", "Delete"),
        ("delete", "app.delete_selected", "Delete"),
    ]


class MomoOrderApp(App):
    """A Textual app for collecting the weekly momo order."""

    TITLE = "Monday Momo Order"
    SUB_TITLE = f"Meat / Veggie momos, {CURRENCY} {UNIT_PRICE} each"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        layout: vertical;
    }

    #main-layout {
        height: 1fr;
    }

    #form-pane {
        width: 2fr;
        border: round $primary;
        padding: 0 1;
    }

    #orders-pane {
        width: 3fr;
        border: round $secondary;
        padding: 0 1;
    }

    #quick-orders {
        grid-size: 2;
        grid-rows: 3;
        height: auto;
    }

    #name-choices {
        grid-size: 3;
        grid-rows: 3;
        height: auto;
    }

    #quick-orders Button, #name-choices Button {
        width: 100%;
    }

    #form-actions, #orders-actions {
        height: auto;
        margin-top: 1;
    }

    #orders-list {
        height: 1fr;
        border: tall $surface;
        padding: 0 1;
    }

    #orders-list:focus {
        border: tall $accent;
    }

    #statistics {
        margin-bottom: 1;
    }

    #status-bar {
        height: 2;
        padding: 0 1;
        background: $panel;
    }

    .pane-title {
        text-style: bold;
        margin-bottom: 1;
    }

    .field-label {
        color: $text-muted;
        margin-top: 1;
    }

    .field-error {
        height: auto;
    }
    """

    meat_momos = reactive(0)
    veggie_momos = reactive(0)
    order_selected_index = reactive(None)

    BINDINGS = [
        Binding("escape", "cancel_edit", "Cancel edit"),
        Binding("ctrl+z", "undo", "Undo"),
        Binding("ctrl+shift+z,ctrl+y", "redo", "Redo"),
        Binding("ctrl+s", "export_receipt", "Export PDF", priority=True),
        Binding("ctrl+o", "open_name_config", "Names", priority=True),
        Binding("ctrl+l", "confirm_clear", "Clear all", priority=True),
        ("ctrl+q", "quit", "Quit"),
    ]

    # Suppressed while a text input has focus.
    _TEXT_ENTRY_SUPPRESSED = {"undo", "redo", "cancel_edit"}
    _MAIN_SCREEN_ONLY = {
        "undo",
        "redo",
        "cancel_edit",
        "export_receipt",
        "open_name_config",
        "confirm_clear",
        "move_selection",
        "edit_selected",
        "duplicate_selected",
        "delete_selected",
    }

    def __init__(self, receipt_exporter: ReceiptExporter = export_receipt) -> None:
        super().__init__()
        self.receipt_exporter = receipt_exporter
        self.book = OrderBook()
        self.form_errors = FormErrors()
        self.system_status = ""
        logger.debug("app_init")

    def compose(self) -> ComposeResult:
        yield Header()
        with Horizontal(id="main-layout"):
            with VerticalScroll(id="form-pane"):
                yield Static("Place Your Order", classes="pane-title", id="form-title")
                yield Static("Quick Order Options:", classes="field-label")
                with Grid(id="quick-orders"):
                    for idx, preset in enumerate(QUICK_ORDERS):
                        yield Button(
                            f"{preset.label} ({CURRENCY} {preset.price})",
                            id=f"quick-{idx}",
                            classes="quick-order",
                        )
                yield Static("Your Name", classes="field-label")
                yield Grid(id="name-choices")
                yield Input(placeholder="Or enter a custom name", id="name-input")
                yield Static(id="name-error", classes="field-error")
                yield Static(f"Meat Momos ({CURRENCY} {UNIT_PRICE} each)", classes="field-label")
                yield Input(placeholder="0", id="meat-input", type="integer")
                yield Static(id="meat-error", classes="field-error")
                yield Static(f"Veggie Momos ({CURRENCY} {UNIT_PRICE} each)", classes="field-label")
                yield Input(placeholder="0", id="veggie-input", type="integer")
                yield Static(id="veggie-error", classes="field-error")
                yield Static(id="total-error", classes="field-error")
                yield Checkbox("Include Soy Sauce", value=True, id="soy-checkbox")
                with Horizontal(id="form-actions"):
                    yield Button("Add Order", id="submit-order", variant="primary")
                    yield Button("Cancel", id="cancel-edit")
            with Vertical(id="orders-pane"):
                yield Static("Order Summary", classes="pane-title")
                yield Static(id="statistics")
                yield OrderList(id="orders-list")
                with Horizontal(id="orders-actions"):
                    yield Button("Export PDF", id="export-receipt")
                    yield Button("Names", id="open-names")
                    yield Button("Clear All", id="clear-orders", variant="error")
        yield Static(id="status-bar")

    async def on_mount(self) -> None:
        try:
            bootstrap_schema()
        except (sqlite3.Error, OSError) as exc:
            logger.exception("bootstrap_failed")
            self.system_status = f"Storage unavailable: {exc}"

        orders = load_orders()
        if has_value(STORAGE_KEY_NAME_CONFIGS):
            name_configs = load_name_configs()
        else:
            name_configs = default_name_configs()
        self.book = OrderBook(
            orders,
            name_configs,
            on_orders_change=save_orders,
            on_name_configs_change=save_name_configs,
        )
        logger.debug("on_mount rows=%d names=%d", len(orders), len(name_configs))
        await self._refresh_name_choices()
        self._refresh_all()
        self.query_one("#name-input", Input).focus()

    def on_key(self, event: Key) -> None:
        logger.debug(
            "on_key key=%r focused=%s screen=%s",
            event.key,
            type(self.focused).__name__,
            type(self.screen).__name__,
        )

    def check_action(self, action: str, parameters: tuple[object, ...]) -> bool | None:
        if action in self._MAIN_SCREEN_ONLY and isinstance(self.screen, ModalScreen):
            return False
        if action in self._TEXT_ENTRY_SUPPRESSED and isinstance(self.focused, Input):
            return False
        return True

    # Form events

    def on_input_changed(self, event: Input.Changed) -> None:
        input_id = event.input.id
        if input_id == "name-input":
            self.form_errors = self.form_errors.cleared("name")
        elif input_id in {"meat-input", "veggie-input"}:
            parsed = parse_quantity(event.value)
            if parsed is None:
                return
            if input_id == "meat-input":
                self.meat_momos = parsed
                self.form_errors = self.form_errors.cleared("meat_momos", "total")
            else:
                self.veggie_momos = parsed
                self.form_errors = self.form_errors.cleared("veggie_momos", "total")
        self._refresh_form()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        self.action_submit_order()

    def on_button_pressed(self, event: Button.Pressed) -> None:
        button = event.button
        if button.has_class("name-choice"):
            self._select_name(button.name or "")
        elif button.has_class("quick-order") and button.id:
            self._apply_quick_order(QUICK_ORDERS[int(button.id.removeprefix("quick-"))])
        elif button.id == "submit-order":
            self.action_submit_order()
        elif button.id == "cancel-edit":
            self.action_cancel_edit()
        elif button.id == "export-receipt":
            self.action_export_receipt()
        elif button.id == "open-names":
            self.action_open_name_config()
        elif button.id == "clear-orders":
            self.action_confirm_clear()

    def _select_name(self, name: str) -> None:
        self.query_one("#name-input", Input).value = name
        config = self.book.name_config_for(name)
        if config is not None:
            self.query_one("#soy-checkbox", Checkbox).value = config.default_soy_sauce
        self.form_errors = self.form_errors.cleared("name")
        self._refresh_form()

    def _apply_quick_order(self, preset: QuickOrder) -> None:
        self._set_quantities(preset.meat_momos, preset.veggie_momos)
        self.form_errors = self.form_errors.cleared("meat_momos", "veggie_momos", "total")
        self._refresh_form()

    def _set_quantities(self, meat_momos: int, veggie_momos: int) -> None:
        self.meat_momos = meat_momos
        self.veggie_momos = veggie_momos
        self.query_one("#meat-input", Input).value = str(meat_momos) if meat_momos else ""
        self.query_one("#veggie-input", Input).value = str(veggie_momos) if veggie_momos else ""

    def _reset_form(self) -> None:
        self.query_one("#name-input", Input).value = ""
        self._set_quantities(0, 0)
        self.query_one("#soy-checkbox", Checkbox).value = True
        self.form_errors = FormErrors()

    # Actions

    def action_submit_order(self) -> None:
        name = self.query_one("#name-input", Input).value
        errors = validate_order_form(name, self.meat_momos, self.veggie_momos)
        if not errors.is_valid:
            self.form_errors = errors
            logger.debug("submit_blocked errors=%r", errors)
            self._refresh_form()
            return

        order = build_order(
            name,
            self.meat_momos,
            self.veggie_momos,
            self.query_one("#soy-checkbox", Checkbox).value,
        )
        editing_index = self.book.editing_index
        self.book.submit_order(order)
        if editing_index is None:
            self.order_selected_index = len(self.book.orders) - 1
            self.system_status = f"Added order for {order.name}"
        else:
            self.order_selected_index = editing_index
            self.system_status = f"Updated order for {order.name}"
        logger.debug("submit_saved rows=%d editing=%r", len(self.book.orders), editing_index)
        self._reset_form()
        self._refresh_all()

    def action_cancel_edit(self) -> None:
        if not self.book.cancel_edit():
            return
        self._reset_form()
        self.system_status = "Edit cancelled"
        self._refresh_all()

    def action_undo(self) -> None:
        self._step_history(self.book.undo, "Undo", "Nothing to undo")

    def action_redo(self) -> None:
        self._step_history(self.book.redo, "Redo", "Nothing to redo")

    def _step_history(self, step: Callable[[], bool], done: str, noop: str) -> None:
        was_editing = self.book.editing_index is not None
        if not step():
            self.system_status = noop
            self._refresh_status()
            return
        if was_editing:
            self._reset_form()
        self.system_status = done
        self._refresh_all()

    def action_move_selection(self, delta: int) -> None:
        rows = self._display_rows()
        if not rows:
            return

        if self.order_selected_index not in rows:
            self.order_selected_index = rows[0] if delta > 0 else rows[-1]
        else:
            position = rows.index(self.order_selected_index)
            self.order_selected_index = rows[(position + delta) % len(rows)]
        self._refresh_orders()

    def action_edit_selected(self) -> None:
        index = self._selected_index()
        if index is None:
            return
        order = self.book.start_edit(index)
        self.query_one("#name-input", Input).value = order.name
        self._set_quantities(order.meat_momos, order.veggie_momos)
        self.query_one("#soy-checkbox", Checkbox).value = order.wants_soy_sauce
        self.form_errors = FormErrors()
        self.system_status = f"Editing order {index + 1}"
        self._refresh_all()

    def action_duplicate_selected(self) -> None:
        index = self._selected_index()
        if index is None:
            return
        copy = self.book.duplicate_order(index)
        self.order_selected_index = len(self.book.orders) - 1
        self.system_status = f"Duplicated order for {copy.name}"
        self._refresh_all()

    def action_delete_selected(self) -> None:
        index = self._selected_index()
        if index is None:
            return
        was_editing = self.book.editing_index is not None
        self.book.delete_order(index)
        if was_editing and self.book.editing_index is None:
            self._reset_form()

        if not self.book.orders:
            self.order_selected_index = None
        else:
            self.order_selected_index = min(index, len(self.book.orders) - 1)
        self.system_status = f"Deleted order {index + 1}"
        self._refresh_all()

    def action_confirm_clear(self) -> None:
        if not self.book.orders:
            self.system_status = "Nothing to clear"
            self._refresh_status()
            return
        self.push_screen(ClearOrdersModal(len(self.book.orders)), self._clear_confirmed)

    def _clear_confirmed(self, confirmed: bool | None) -> None:
        if not confirmed:
            return
        was_editing = self.book.editing_index is not None
        self.book.clear_orders()
        if was_editing:
            self._reset_form()
        self.order_selected_index = None
        self.system_status = "Cleared all orders"
        self._refresh_all()

    def action_open_name_config(self) -> None:
        self.push_screen(NameConfigModal(self.book, on_change=self._name_configs_changed))

    def _name_configs_changed(self) -> None:
        self.call_after_refresh(self._refresh_name_choices)

    def action_export_receipt(self) -> None:
        orders = self.book.orders
        if not orders:
            self.system_status = "Nothing to export"
            self._refresh_status()
            return
        self.system_status = "Exporting receipt..."
        self._refresh_status()
        self._export_receipt_worker(orders)

    @work(thread=True, group="export")
    def _export_receipt_worker(self, orders: tuple[Order, ...]) -> None:
        try:
            path = self.receipt_exporter(orders)
        except Exception as exc:
            logger.exception("export_failed rows=%d", len(orders))
            self.call_from_thread(self._export_failed, exc)
            return
        self.call_from_thread(self._export_finished, path)

    def _export_finished(self, path: Path) -> None:
        self.system_status = f"Exported {path}"
        self._refresh_status()

    def _export_failed(self, exc: Exception) -> None:
        self.system_status = "Export failed"
        self._refresh_status()
        self.push_screen(AlertModal("Export Failed", f"Error generating PDF. Please try again.\n{exc}"))

    # Rendering

    def _display_rows(self) -> list[int]:
        """Order indexes in display order: grouped by name, groups in first-seen order."""
        groups: dict[str, list[int]] = {}
        for idx, order in enumerate(self.book.orders):
            groups.setdefault(order.name, []).append(idx)
        return [idx for indexes in groups.values() for idx in indexes]

    def _selected_index(self) -> int | None:
        if self.order_selected_index is None:
            return None
        if not (0 <= self.order_selected_index < len(self.book.orders)):
            return None
        return self.order_selected_index

    def _refresh_all(self) -> None:
        self._refresh_form()
        self._refresh_orders()
        self._refresh_status()

    async def _refresh_name_choices(self) -> None:
        try:
            container = self.query_one("#name-choices", Grid)
        except NoMatches:
            return
        await container.remove_children()
        await container.mount_all(
            Button(Text(config.name), name=config.name, classes="name-choice")
            for config in self.book.name_configs
        )
        self._refresh_form()

    def _refresh_form(self) -> None:
        try:
            title = self.query_one("#form-title", Static)
        except NoMatches:
            return
        editing = self.book.editing_index is not None
        title.update("Edit Order" if editing else "Place Your Order")
        self.query_one("#submit-order", Button).label = "Update Order" if editing else "Add Order"
        self.query_one("#cancel-edit", Button).display = editing

        self.query_one("#name-error", Static).update(format_error(self.form_errors.name))
        self.query_one("#meat-error", Static).update(format_error(self.form_errors.meat_momos))
        self.query_one("#veggie-error", Static).update(format_error(self.form_errors.veggie_momos))
        self.query_one("#total-error", Static).update(format_error(self.form_errors.total))

        current_name = self.query_one("#name-input", Input).value
        for button in self.query(".name-choice").results(Button):
            button.variant = "primary" if button.name == current_name else "default"
        for idx, preset in enumerate(QUICK_ORDERS):
            selected = preset.matches(self.meat_momos, self.veggie_momos)
            self.query_one(f"#quick-{idx}", Button).variant = "primary" if selected else "default"

    def _visible_rows(self, widget: Static) -> int:
        height = widget.size.height
        if height <= 0:
            return 8
        # Group headings take a line of their own.
        return max(1, height // 2)

    def _window_bounds(self, total: int, rows: int, selected: int | None) -> tuple[int, int]:
        if total <= 0:
            return (0, 0)

        rows = max(1, rows)
        if total <= rows:
            return (0, total)

        if selected is None:
            start = 0
        else:
            half = rows // 2
            start = selected - half
            start = max(0, start)
            start = min(start, total - rows)

        return (start, start + rows)

    def _refresh_orders(self) -> None:
        try:
            orders_widget = self.query_one("#orders-list", OrderList)
        except NoMatches:
            return
        orders = self.book.orders
        self.query_one("#statistics", Static).update(format_statistics(summarize_orders(orders)))
        if not orders:
            self.order_selected_index = None
            orders_widget.update("No orders yet. Add your first order!")
            return

        if self.order_selected_index is not None and self.order_selected_index >= len(orders):
            self.order_selected_index = len(orders) - 1

        rows = self._display_rows()
        selected_pos = rows.index(self.order_selected_index) if self.order_selected_index is not None else None
        start, end = self._window_bounds(len(rows), self._visible_rows(orders_widget), selected_pos)

        lines = Text()
        if start > 0:
            lines.append("⋮\n", style="dim")

        previous_name: str | None = None
        for pos in range(start, end):
            idx = rows[pos]
            order = orders[idx]
            if pos > start:
                lines.append("\n")
            if order.name != previous_name:
                lines.append(f"{order.name}'s Orders\n", style="bold")
                previous_name = order.name

            pointer = "➤ " if idx == self.order_selected_index else "  "
            lines.append(pointer)
            lines.append(f"{idx + 1}. ")
            if idx == self.book.editing_index:
                lines.append("(editing) ", style="italic")
            lines.append_text(format_order_label(order))

        if end < len(rows):
            lines.append("\n⋮", style="dim")

        orders_widget.update(lines)

    def _refresh_status(self) -> None:
        try:
            bar = self.query_one("#status-bar", Static)
        except NoMatches:
            return
        text = Text()
        text.append(self.system_status or "Ready", style="bold")
        history_state = []
        if self.book.can_undo:
            history_state.append("undo")
        if self.book.can_redo:
            history_state.append("redo")
        if history_state:
            text.append(f"  ({' / '.join(history_state)} available)", style="dim")
        text.append(f"\n{HELP_LINE}", style="dim")
        bar.update(text)
