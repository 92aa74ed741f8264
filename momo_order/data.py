"""Static name and quick-order data."""

from __future__ import annotations

from dataclasses import dataclass

from momo_order.config import UNIT_PRICE
from momo_order.constant import PREDEFINED_NAMES, QUICK_ORDERS as _QUICK_ORDERS_RAW
from momo_order.models import NameConfig


@dataclass(frozen=True)
class QuickOrder:
    """A one-click preset filling both quantity fields."""

    label: str
    meat_momos: int
    veggie_momos: int

    @property
    def price(self) -> int:
        return (self.meat_momos + self.veggie_momos) * UNIT_PRICE

    def matches(self, meat_momos: int, veggie_momos: int) -> bool:
        return self.meat_momos == meat_momos and self.veggie_momos == veggie_momos


QUICK_ORDERS: list[QuickOrder] = [
    QuickOrder(
        label=str(preset["label"]),
        meat_momos=int(preset["meat"]),
        veggie_momos=int(preset["veggie"]),
    )
    for preset in _QUICK_ORDERS_RAW
]


def default_name_configs() -> list[NameConfig]:
    """Name preferences used when nothing has been saved yet."""
    return [NameConfig(name=name, default_soy_sauce=True) for name in PREDEFINED_NAMES]
