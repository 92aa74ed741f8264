from __future__ import annotations

from pathlib import Path

import pytest

from momo_order import persistence
from momo_order.models import Order


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the key-value store at a throwaway sqlite file."""
    path = tmp_path / "momo-order.db"
    monkeypatch.setattr(persistence, "DB_PATH", str(path))
    return path


@pytest.fixture
def sample_orders() -> list[Order]:
    return [
        Order(name="Ann", meat_momos=2, veggie_momos=0, wants_soy_sauce=True),
        Order(name="Bob", meat_momos=5, veggie_momos=5, wants_soy_sauce=False),
        Order(name="Ann", meat_momos=0, veggie_momos=1, wants_soy_sauce=True),
    ]
