"""Editable static names and quick-order presets."""

from __future__ import annotations

# Names offered on first launch, before any preference has been saved.
PREDEFINED_NAMES: list[str] = [
    "Ramon",
    "Roger",
    "Sandro",
    "Paavo",
    "Janik",
]

# Canonical quick-order values consumed by momo_order.data (which wraps these into QuickOrder instances).
QUICK_ORDERS: list[dict[str, int | str]] = [
    {"label": "5 Meat + 5 Veggie", "meat": 5, "veggie": 5},
    {"label": "4 Meat + 4 Veggie", "meat": 4, "veggie": 4},
    {"label": "8 Meat", "meat": 8, "veggie": 0},
    {"label": "8 Veggie", "meat": 0, "veggie": 8},
]

STORAGE_KEY_ORDERS = "momoOrders"
STORAGE_KEY_NAME_CONFIGS = "nameConfigs"
