"""Order form validation."""

from __future__ import annotations

from dataclasses import dataclass, fields, replace

from momo_order.config import MAX_MOMOS_PER_ORDER, MIN_NAME_LENGTH
from momo_order.models import Order

NAME_REQUIRED = "Name is required"
NAME_TOO_SHORT = f"Name must be at least {MIN_NAME_LENGTH} characters"
QUANTITY_NEGATIVE = "Cannot be negative"
TOTAL_EMPTY = "Please order at least one momo"
TOTAL_TOO_LARGE = f"Maximum {MAX_MOMOS_PER_ORDER} momos per order"


@dataclass(frozen=True)
class FormErrors:
    """Field-level messages. An empty string means the field is fine."""

    name: str = ""
    meat_momos: str = ""
    veggie_momos: str = ""
    total: str = ""

    @property
    def is_valid(self) -> bool:
        return not any(getattr(self, f.name) for f in fields(self))

    def cleared(self, *field_names: str) -> FormErrors:
        """Return a copy with the given messages removed."""
        return replace(self, **{name: "" for name in field_names})


def validate_order_form(name: str, meat_momos: int, veggie_momos: int) -> FormErrors:
    """Run every check and collect all applicable messages."""
    trimmed = name.strip()
    name_error = ""
    if not trimmed:
        name_error = NAME_REQUIRED
    elif len(trimmed) < MIN_NAME_LENGTH:
        name_error = NAME_TOO_SHORT

    total = meat_momos + veggie_momos
    total_error = ""
    if total == 0:
        total_error = TOTAL_EMPTY
    elif total > MAX_MOMOS_PER_ORDER:
        total_error = TOTAL_TOO_LARGE

    return FormErrors(
        name=name_error,
        meat_momos=QUANTITY_NEGATIVE if meat_momos < 0 else "",
        veggie_momos=QUANTITY_NEGATIVE if veggie_momos < 0 else "",
        total=total_error,
    )


def parse_quantity(value: str) -> int | None:
    """Parse a quantity field. Empty is 0; anything non-numeric is None."""
    raw = value.strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        return None


def build_order(name: str, meat_momos: int, veggie_momos: int, wants_soy_sauce: bool) -> Order:
    return Order(
        name=name.strip(),
        meat_momos=meat_momos,
        veggie_momos=veggie_momos,
        wants_soy_sauce=wants_soy_sauce,
    )
