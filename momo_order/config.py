"""Runtime configuration defaults for persistence, pricing and receipts."""

from __future__ import annotations

DB_PATH = "data/momo-order.db"
EXPORT_DIR = "exports"
DEBUG_LOG_PATH = "/tmp/momo-order-debug.log"

# Flat per-piece price, applied to meat and veggie momos alike.
UNIT_PRICE = 2
CURRENCY = "CHF"
MAX_MOMOS_PER_ORDER = 20
MIN_NAME_LENGTH = 2

RECEIPT_TITLE = "Monday Momo Order"
# Width in mm of the longer bar in the receipt summary chart.
RECEIPT_BAR_MAX_WIDTH = 70
RECEIPT_QR_SIZE_MM = 35

QR_IMAGE_SIZE_PX = 200
QR_BORDER = 2
