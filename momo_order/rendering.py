"""Rich text helpers for the order list, statistics and form feedback."""

from __future__ import annotations

from rich.text import Text

from momo_order.config import CURRENCY
from momo_order.models import Order
from momo_order.summary import OrderSummary, order_total

MEAT_STYLE = "bold #ffffff on #1d4f91"
VEGGIE_STYLE = "bold #0b1f0f on #34d399"
ERROR_STYLE = "#ffb3b3"


def format_order_label(order: Order) -> Text:
    """Render one order as quantity badges, soy sauce choice and line total."""
    text = Text()
    if order.meat_momos > 0:
        text.append(f" M{order.meat_momos} ", style=MEAT_STYLE)
        text.append(" ")
    if order.veggie_momos > 0:
        text.append(f" V{order.veggie_momos} ", style=VEGGIE_STYLE)
        text.append(" ")
    text.append("soy" if order.wants_soy_sauce else "no soy", style="dim")
    text.append(f"  {CURRENCY} {order_total(order)}", style="bold")
    return text


def format_statistics(summary: OrderSummary) -> Text:
    text = Text()
    text.append(f"{summary.order_count} order{'s' if summary.order_count != 1 else ''}", style="bold")
    text.append("   Meat ")
    text.append(str(summary.meat_momos), style="bold")
    text.append("   Veggie ")
    text.append(str(summary.veggie_momos), style="bold")
    text.append("   Total ")
    text.append(f"{CURRENCY} {summary.total_amount}", style="bold")
    return text


def format_error(message: str) -> Text:
    if not message:
        return Text()
    return Text(message, style=ERROR_STYLE)
