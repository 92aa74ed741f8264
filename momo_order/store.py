"""Order book: the single state container behind the form.

All order-list changes are whole-list replacements recorded in the history.
Callers get notified after every change so they can persist it.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Iterable

from momo_order import history
from momo_order.history import OrderHistoryState
from momo_order.models import NameConfig, Order

logger = logging.getLogger(__name__)

OrdersCallback = Callable[[tuple[Order, ...]], None]
NameConfigsCallback = Callable[[tuple[NameConfig, ...]], None]


class OrderBook:
    """Holds the order history, name preferences and the in-progress edit."""

    def __init__(
        self,
        orders: Iterable[Order] = (),
        name_configs: Iterable[NameConfig] = (),
        on_orders_change: OrdersCallback | None = None,
        on_name_configs_change: NameConfigsCallback | None = None,
    ) -> None:
        self._history = history.initial_history(orders)
        self._name_configs: tuple[NameConfig, ...] = tuple(name_configs)
        self._on_orders_change = on_orders_change
        self._on_name_configs_change = on_name_configs_change
        self.editing_index: int | None = None

    @property
    def history(self) -> OrderHistoryState:
        return self._history

    @property
    def orders(self) -> tuple[Order, ...]:
        return history.current_orders(self._history)

    @property
    def name_configs(self) -> tuple[NameConfig, ...]:
        return self._name_configs

    @property
    def can_undo(self) -> bool:
        return history.can_undo(self._history)

    @property
    def can_redo(self) -> bool:
        return history.can_redo(self._history)

    def _check_index(self, index: int) -> None:
        if not (0 <= index < len(self.orders)):
            raise IndexError(f"order index {index} out of range")

    def _commit(self, new_orders: Iterable[Order], action: str) -> None:
        self._history = history.record(self._history, new_orders)
        logger.debug(
            "record action=%s rows=%d index=%d",
            action,
            len(self.orders),
            self._history.current_index,
        )
        self._notify_orders()

    def _notify_orders(self) -> None:
        if self._on_orders_change is not None:
            self._on_orders_change(self.orders)

    def _notify_name_configs(self) -> None:
        if self._on_name_configs_change is not None:
            self._on_name_configs_change(self._name_configs)

    # Orders

    def add_order(self, order: Order) -> None:
        self._commit(self.orders + (order,), "add")

    def update_order(self, index: int, order: Order) -> None:
        self._check_index(index)
        rows = list(self.orders)
        rows[index] = order
        self._commit(rows, "edit")

    def delete_order(self, index: int) -> None:
        self._check_index(index)
        rows = list(self.orders)
        del rows[index]
        if self.editing_index is not None:
            if self.editing_index == index:
                self.editing_index = None
            elif self.editing_index > index:
                self.editing_index -= 1
        self._commit(rows, "delete")

    def duplicate_order(self, index: int) -> Order:
        """Append a copy of the order at index and return it."""
        self._check_index(index)
        copy = replace(self.orders[index])
        self._commit(self.orders + (copy,), "duplicate")
        return copy

    def clear_orders(self) -> None:
        self.editing_index = None
        self._commit((), "clear")

    def submit_order(self, order: Order) -> None:
        """Add a new order, or replace the one being edited."""
        if self.editing_index is None:
            self.add_order(order)
            return
        index = self.editing_index
        self.editing_index = None
        self.update_order(index, order)

    def start_edit(self, index: int) -> Order:
        self._check_index(index)
        self.editing_index = index
        return self.orders[index]

    def cancel_edit(self) -> bool:
        """Drop the in-progress edit. Returns False when nothing was being edited."""
        if self.editing_index is None:
            return False
        self.editing_index = None
        return True

    def undo(self) -> bool:
        """Step back one snapshot. Returns False at the oldest snapshot."""
        if not self.can_undo:
            return False
        self.editing_index = None
        self._history = history.undo(self._history)
        self._notify_orders()
        return True

    def redo(self) -> bool:
        if not self.can_redo:
            return False
        self.editing_index = None
        self._history = history.redo(self._history)
        self._notify_orders()
        return True

    # Name preferences

    def name_config_for(self, name: str) -> NameConfig | None:
        for config in self._name_configs:
            if config.name == name:
                return config
        return None

    def add_name_config(self, name: str, default_soy_sauce: bool = True) -> bool:
        """Add a name preference. Blank or already known names are ignored."""
        normalized = name.strip()
        if not normalized or self.name_config_for(normalized) is not None:
            return False
        self._name_configs = self._name_configs + (NameConfig(normalized, default_soy_sauce),)
        self._notify_name_configs()
        return True

    def remove_name_config(self, name: str) -> bool:
        remaining = tuple(config for config in self._name_configs if config.name != name)
        if len(remaining) == len(self._name_configs):
            return False
        self._name_configs = remaining
        self._notify_name_configs()
        return True

    def update_name_preference(self, name: str, default_soy_sauce: bool) -> bool:
        if self.name_config_for(name) is None:
            return False
        self._name_configs = tuple(
            replace(config, default_soy_sauce=default_soy_sauce) if config.name == name else config
            for config in self._name_configs
        )
        self._notify_name_configs()
        return True
