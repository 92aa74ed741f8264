"""QR verification code for exported receipts."""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from typing import Any, Iterable

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_M

from momo_order.config import QR_BORDER, QR_IMAGE_SIZE_PX
from momo_order.models import Order
from momo_order.summary import order_total


def _utc_timestamp(stamp: datetime) -> str:
    # Millisecond precision with a Z suffix, e.g. 2026-10-19T11:30:00.000Z
    return stamp.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def build_verification_payload(orders: Iterable[Order], generated_at: datetime | None = None) -> dict[str, Any]:
    """Full order payload encoded into the receipt QR code."""
    order_list = list(orders)
    stamp = generated_at or datetime.now(timezone.utc)
    return {
        "orders": [order.to_dict() for order in order_list],
        "timestamp": _utc_timestamp(stamp),
        "totalAmount": sum(order_total(order) for order in order_list),
    }


def generate_verification_code(payload: dict[str, Any]) -> bytes:
    """Render the payload as a square PNG QR code and return the image bytes."""
    qr = qrcode.QRCode(error_correction=ERROR_CORRECT_M, border=QR_BORDER)
    qr.add_data(json.dumps(payload, separators=(",", ":")))
    qr.make(fit=True)

    img = qr.make_image(fill_color="black", back_color="white").get_image()
    img = img.convert("RGB").resize((QR_IMAGE_SIZE_PX, QR_IMAGE_SIZE_PX), Image.Resampling.NEAREST)

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
