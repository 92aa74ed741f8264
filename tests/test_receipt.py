from __future__ import annotations

import io
import json
import re
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

import pytest
from PIL import Image

from momo_order.config import QR_IMAGE_SIZE_PX, RECEIPT_BAR_MAX_WIDTH
from momo_order.models import Order
from momo_order.receipt import bar_lengths, export_receipt, receipt_filename, render_receipt
from momo_order.verification import build_verification_payload, generate_verification_code

GENERATED_AT = datetime(2026, 10, 19, 11, 30, tzinfo=timezone.utc)


def test_payload_carries_orders_timestamp_and_total(sample_orders: list[Order]) -> None:
    payload = build_verification_payload(sample_orders, GENERATED_AT)

    assert payload["orders"][0] == {"name": "Ann", "meatMomos": 2, "veggieMomos": 0, "wantsSoySauce": True}
    assert len(payload["orders"]) == 3
    assert payload["timestamp"] == "2026-10-19T11:30:00.000Z"
    assert payload["totalAmount"] == 26
    json.dumps(payload)


def test_payload_timestamp_is_utc_with_z_suffix() -> None:
    zurich = timezone(timedelta(hours=2))

    payload = build_verification_payload([], datetime(2026, 10, 19, 13, 30, 5, 250000, tzinfo=zurich))

    assert payload["timestamp"] == "2026-10-19T11:30:05.250Z"
    assert payload["totalAmount"] == 0


def test_verification_code_is_square_png(sample_orders: list[Order]) -> None:
    png = generate_verification_code(build_verification_payload(sample_orders, GENERATED_AT))

    assert png.startswith(b"\x89PNG")
    with Image.open(io.BytesIO(png)) as img:
        assert img.size == (QR_IMAGE_SIZE_PX, QR_IMAGE_SIZE_PX)


@pytest.mark.parametrize(
    "meat,veggie,expected",
    (
        (10, 5, (RECEIPT_BAR_MAX_WIDTH, RECEIPT_BAR_MAX_WIDTH / 2)),
        (0, 4, (0, RECEIPT_BAR_MAX_WIDTH)),
        (0, 0, (0, 0)),
    ),
)
def test_bar_lengths_scale_to_larger_total(meat: int, veggie: int, expected: tuple[float, float]) -> None:
    assert bar_lengths(meat, veggie) == pytest.approx(expected)


def test_receipt_filename_uses_iso_date() -> None:
    assert receipt_filename(GENERATED_AT) == "momo-order-2026-10-19.pdf"


def test_render_receipt_embeds_code(sample_orders: list[Order]) -> None:
    payloads: list[dict[str, Any]] = []

    def code_generator(payload: dict[str, Any]) -> bytes:
        payloads.append(payload)
        return generate_verification_code(payload)

    document = render_receipt(sample_orders, generated_at=GENERATED_AT, code_generator=code_generator)

    assert document.startswith(b"%PDF")
    assert payloads == [build_verification_payload(sample_orders, GENERATED_AT)]


def test_render_receipt_survives_code_failure(sample_orders: list[Order]) -> None:
    def broken_generator(payload: dict[str, Any]) -> bytes:
        raise RuntimeError("qr backend down")

    with_code = render_receipt(sample_orders, generated_at=GENERATED_AT)
    without_code = render_receipt(sample_orders, generated_at=GENERATED_AT, code_generator=broken_generator)

    assert without_code.startswith(b"%PDF")
    assert len(without_code) < len(with_code)


def test_render_receipt_paginates_long_lists() -> None:
    orders = [Order(name=f"Person {idx}", meat_momos=3, veggie_momos=2) for idx in range(60)]

    document = render_receipt(orders, generated_at=GENERATED_AT)

    page_count = re.search(rb"/Count (\d+)", document)
    assert page_count is not None
    assert int(page_count.group(1)) > 1


def test_render_receipt_handles_non_latin_names() -> None:
    orders = [Order(name="Zoë 😀", meat_momos=1)]

    assert render_receipt(orders, generated_at=GENERATED_AT).startswith(b"%PDF")


def test_export_writes_dated_file(tmp_path: Path, sample_orders: list[Order]) -> None:
    calls: list[tuple[list[Order], datetime]] = []

    def renderer(orders: list[Order], generated_at: datetime) -> bytes:
        calls.append((orders, generated_at))
        return b"%PDF-fake"

    path = export_receipt(sample_orders, tmp_path / "out", generated_at=GENERATED_AT, renderer=renderer)

    assert path == tmp_path / "out" / "momo-order-2026-10-19.pdf"
    assert path.read_bytes() == b"%PDF-fake"
    assert calls == [(sample_orders, GENERATED_AT)]
