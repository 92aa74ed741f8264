"""Order grouping and totals."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable

from momo_order.config import UNIT_PRICE
from momo_order.models import Order

_ANONYMIZED_FILL = "."
_ANONYMIZED_MAX_FILL = 3


@dataclass(frozen=True)
class OrderGroup:
    """All orders placed under one name."""

    name: str
    orders: tuple[Order, ...]
    momo_count: int
    total_amount: int


@dataclass(frozen=True)
class OrderSummary:
    """Aggregate view of the whole order list."""

    groups: tuple[OrderGroup, ...]
    order_count: int
    meat_momos: int
    veggie_momos: int
    momo_count: int
    total_amount: int


def order_total(order: Order, unit_price: int = UNIT_PRICE) -> int:
    """Line total for one order."""
    return order.momo_count * unit_price


def group_orders_by_name(orders: Iterable[Order]) -> dict[str, list[Order]]:
    """Group orders by submitter, keeping the order groups were first seen."""
    groups: dict[str, list[Order]] = {}
    for order in orders:
        groups.setdefault(order.name, []).append(order)
    return groups


def summarize_orders(orders: Iterable[Order], unit_price: int = UNIT_PRICE) -> OrderSummary:
    order_list = list(orders)
    groups = tuple(
        OrderGroup(
            name=name,
            orders=tuple(members),
            momo_count=sum(order.momo_count for order in members),
            total_amount=sum(order_total(order, unit_price) for order in members),
        )
        for name, members in group_orders_by_name(order_list).items()
    )
    meat = sum(order.meat_momos for order in order_list)
    veggie = sum(order.veggie_momos for order in order_list)
    return OrderSummary(
        groups=groups,
        order_count=len(order_list),
        meat_momos=meat,
        veggie_momos=veggie,
        momo_count=meat + veggie,
        total_amount=sum(order_total(order, unit_price) for order in order_list),
    )


def anonymize_name(name: str) -> str:
    """Mask a name down to its first and last character, e.g. Sandro -> S...o."""
    if len(name) <= 2:
        return name
    fill = _ANONYMIZED_FILL * min(_ANONYMIZED_MAX_FILL, len(name) - 2)
    return f"{name[0]}{fill}{name[-1]}"
