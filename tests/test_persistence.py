from __future__ import annotations

import json
from pathlib import Path

from momo_order import persistence
from momo_order.constant import STORAGE_KEY_NAME_CONFIGS, STORAGE_KEY_ORDERS
from momo_order.models import NameConfig, Order


def test_orders_round_trip(db_path: Path, sample_orders: list[Order]) -> None:
    persistence.bootstrap_schema()
    persistence.save_orders(sample_orders)

    assert persistence.load_orders() == sample_orders


def test_orders_are_stored_as_json_documents(db_path: Path) -> None:
    persistence.bootstrap_schema()
    persistence.save_orders([Order(name="Ann", meat_momos=2, veggie_momos=1, wants_soy_sauce=False)])

    raw = persistence.read_value(STORAGE_KEY_ORDERS)

    assert raw is not None
    assert json.loads(raw) == [
        {"name": "Ann", "meatMomos": 2, "veggieMomos": 1, "wantsSoySauce": False}
    ]


def test_last_write_wins(db_path: Path, sample_orders: list[Order]) -> None:
    persistence.bootstrap_schema()
    persistence.save_orders(sample_orders)
    persistence.save_orders(sample_orders[:1])

    assert persistence.load_orders() == sample_orders[:1]


def test_missing_value_loads_empty(db_path: Path) -> None:
    persistence.bootstrap_schema()

    assert persistence.load_orders() == []
    assert not persistence.has_value(STORAGE_KEY_ORDERS)


def test_missing_table_loads_empty(db_path: Path) -> None:
    assert persistence.load_orders() == []


def test_corrupted_json_loads_empty(db_path: Path) -> None:
    persistence.bootstrap_schema()
    persistence.write_value(STORAGE_KEY_ORDERS, "{not json")

    assert persistence.load_orders() == []


def test_wrong_shape_loads_empty(db_path: Path) -> None:
    persistence.bootstrap_schema()
    persistence.write_value(STORAGE_KEY_ORDERS, json.dumps([{"name": "Ann"}]))
    assert persistence.load_orders() == []

    persistence.write_value(STORAGE_KEY_ORDERS, json.dumps({"name": "Ann"}))
    assert persistence.load_orders() == []


def test_name_configs_round_trip(db_path: Path) -> None:
    configs = [NameConfig("Ramon", True), NameConfig("Paavo", False)]
    persistence.bootstrap_schema()
    persistence.save_name_configs(configs)

    assert persistence.load_name_configs() == configs
    assert persistence.has_value(STORAGE_KEY_NAME_CONFIGS)


def test_empty_name_configs_are_still_a_saved_value(db_path: Path) -> None:
    persistence.bootstrap_schema()
    persistence.save_name_configs([])

    assert persistence.has_value(STORAGE_KEY_NAME_CONFIGS)
    assert persistence.load_name_configs() == []


def test_save_failure_is_swallowed(tmp_path: Path, monkeypatch) -> None:
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file in the way")
    monkeypatch.setattr(persistence, "DB_PATH", str(blocker / "momo.db"))

    persistence.save_orders([Order(name="Ann", meat_momos=1)])

    assert persistence.load_orders() == []


def test_non_boolean_soy_flag_loads_empty(db_path: Path) -> None:
    persistence.bootstrap_schema()
    persistence.write_value(
        STORAGE_KEY_ORDERS,
        json.dumps([{"name": "Ann", "meatMomos": 2, "veggieMomos": 0, "wantsSoySauce": "false"}]),
    )
    persistence.write_value(STORAGE_KEY_NAME_CONFIGS, json.dumps([{"name": "Ann", "defaultSoySauce": 0}]))

    assert persistence.load_orders() == []
    assert persistence.load_name_configs() == []
