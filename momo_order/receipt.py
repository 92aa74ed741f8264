"""PDF receipt export for the collected orders."""

from __future__ import annotations

import io
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Iterable

from fpdf import FPDF

from momo_order.config import (
    CURRENCY,
    EXPORT_DIR,
    RECEIPT_BAR_MAX_WIDTH,
    RECEIPT_QR_SIZE_MM,
    RECEIPT_TITLE,
    UNIT_PRICE,
)
from momo_order.models import Order
from momo_order.summary import OrderSummary, anonymize_name, summarize_orders
from momo_order.verification import build_verification_payload, generate_verification_code

logger = logging.getLogger(__name__)

CodeGenerator = Callable[[dict[str, Any]], bytes]
ReceiptRenderer = Callable[..., bytes]

_FONT = "Helvetica"
_TITLE_RGB = (26, 54, 93)
_HEADING_RGB = (45, 55, 72)
_BODY_RGB = (74, 85, 104)
_MUTED_RGB = (113, 128, 150)
_ACCENT_RGB = (43, 108, 176)
_MEAT_BAR_RGB = (29, 79, 145)
_VEGGIE_BAR_RGB = (52, 211, 153)
_RULE_RGB = (226, 232, 240)
_BAR_HEIGHT_MM = 6
_BAR_LABEL_WIDTH_MM = 25


def _pdf_text(text: str) -> str:
    # Core PDF fonts only cover latin-1.
    return text.encode("latin-1", "replace").decode("latin-1")


def _money(amount: int) -> str:
    return f"{CURRENCY} {amount}"


class ReceiptPDF(FPDF):
    """A4 receipt with a generation-time footer on every page."""

    def __init__(self, generated_at: datetime) -> None:
        super().__init__(format="A4")
        self.generated_at = generated_at
        self.set_margins(15, 15, 15)
        self.set_auto_page_break(auto=True, margin=25)

    def footer(self) -> None:
        local = self.generated_at.astimezone()
        self.set_y(-18)
        self.set_font(_FONT, "I", 8)
        self.set_text_color(*_MUTED_RGB)
        self.cell(0, 4, f"This order was generated on {local:%H:%M}", new_x="LMARGIN", new_y="NEXT", align="C")
        self.cell(0, 4, f"Page {self.page_no()}", align="C")

    def section_title(self, title: str) -> None:
        self.set_font(_FONT, "B", 14)
        self.set_text_color(*_HEADING_RGB)
        self.cell(0, 8, title, new_x="LMARGIN", new_y="NEXT")
        self.set_draw_color(*_RULE_RGB)
        self.set_line_width(0.3)
        self.line(self.l_margin, self.get_y(), self.w - self.r_margin, self.get_y())
        self.ln(3)


def receipt_filename(generated_at: datetime) -> str:
    """File name for an export, keyed by the UTC calendar date."""
    return f"momo-order-{generated_at.astimezone(timezone.utc).date().isoformat()}.pdf"


def bar_lengths(meat_momos: int, veggie_momos: int, max_width: float = RECEIPT_BAR_MAX_WIDTH) -> tuple[float, float]:
    """Scale both totals so the larger one spans max_width."""
    largest = max(meat_momos, veggie_momos)
    scale = max_width / largest if largest > 0 else 1
    return (meat_momos * scale, veggie_momos * scale)


def _draw_header(pdf: ReceiptPDF, generated_at: datetime) -> None:
    local = generated_at.astimezone()
    pdf.set_font(_FONT, "B", 24)
    pdf.set_text_color(*_TITLE_RGB)
    pdf.cell(0, 12, RECEIPT_TITLE, new_x="LMARGIN", new_y="NEXT")
    pdf.set_font(_FONT, "", 12)
    pdf.set_text_color(*_BODY_RGB)
    pdf.cell(0, 7, f"Order Date: {local:%A}, {local:%B} {local.day}, {local.year}", new_x="LMARGIN", new_y="NEXT")
    pdf.ln(8)


def _draw_bar(pdf: ReceiptPDF, label: str, count: int, width: float, rgb: tuple[int, int, int]) -> None:
    y = pdf.get_y()
    pdf.set_font(_FONT, "", 11)
    pdf.set_text_color(*_BODY_RGB)
    pdf.cell(_BAR_LABEL_WIDTH_MM, _BAR_HEIGHT_MM + 2, label)
    x = pdf.get_x()
    if width > 0:
        pdf.set_fill_color(*rgb)
        pdf.rect(x, y + 1, width, _BAR_HEIGHT_MM, style="F")
    pdf.set_x(x + width + 3)
    pdf.cell(0, _BAR_HEIGHT_MM + 2, str(count), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)


def _draw_bar_chart(pdf: ReceiptPDF, summary: OrderSummary) -> None:
    pdf.section_title("Order Summary")
    meat_width, veggie_width = bar_lengths(summary.meat_momos, summary.veggie_momos)
    _draw_bar(pdf, "Meat", summary.meat_momos, meat_width, _MEAT_BAR_RGB)
    _draw_bar(pdf, "Veggie", summary.veggie_momos, veggie_width, _VEGGIE_BAR_RGB)
    pdf.ln(6)


def _order_lines(order: Order) -> list[str]:
    lines = []
    if order.meat_momos > 0:
        lines.append(
            f"- Meat Momos: {order.meat_momos} x {_money(UNIT_PRICE)} = {_money(order.meat_momos * UNIT_PRICE)}"
        )
    if order.veggie_momos > 0:
        lines.append(
            f"- Veggie Momos: {order.veggie_momos} x {_money(UNIT_PRICE)} = {_money(order.veggie_momos * UNIT_PRICE)}"
        )
    lines.append("- With soy sauce" if order.wants_soy_sauce else "- No soy sauce")
    return lines


def _draw_order_details(pdf: ReceiptPDF, summary: OrderSummary) -> None:
    pdf.section_title("Order Details")
    half_width = (pdf.w - pdf.l_margin - pdf.r_margin) / 2
    for group in summary.groups:
        # Keep a submitter heading together with its first order.
        if pdf.will_page_break(7 + 5 * 3):
            pdf.add_page()
        pdf.set_font(_FONT, "B", 13)
        pdf.set_text_color(*_HEADING_RGB)
        pdf.cell(half_width, 7, _pdf_text(anonymize_name(group.name)))
        pdf.set_text_color(*_ACCENT_RGB)
        pdf.cell(0, 7, _money(group.total_amount), new_x="LMARGIN", new_y="NEXT", align="R")

        pdf.set_font(_FONT, "", 11)
        for order in group.orders:
            for line in _order_lines(order):
                pdf.set_text_color(*(_MUTED_RGB if "soy sauce" in line else _BODY_RGB))
                pdf.set_x(pdf.l_margin + 6)
                pdf.cell(0, 5, line, new_x="LMARGIN", new_y="NEXT")
        pdf.ln(4)


def _draw_totals(pdf: ReceiptPDF, summary: OrderSummary) -> None:
    if pdf.will_page_break(24):
        pdf.add_page()
    pdf.ln(2)
    pdf.set_draw_color(*_RULE_RGB)
    pdf.set_line_width(0.6)
    pdf.line(pdf.l_margin, pdf.get_y(), pdf.w - pdf.r_margin, pdf.get_y())
    pdf.ln(4)
    half_width = (pdf.w - pdf.l_margin - pdf.r_margin) / 2
    for label, value in (
        ("Total Momos", f"{summary.momo_count} pieces"),
        ("Total Amount", _money(summary.total_amount)),
    ):
        pdf.set_font(_FONT, "B", 14)
        pdf.set_text_color(*_HEADING_RGB)
        pdf.cell(half_width, 8, label)
        pdf.set_text_color(*_ACCENT_RGB)
        pdf.cell(0, 8, value, new_x="LMARGIN", new_y="NEXT", align="R")


def _draw_verification(pdf: ReceiptPDF, png_bytes: bytes) -> None:
    if pdf.will_page_break(RECEIPT_QR_SIZE_MM + 24):
        pdf.add_page()
    pdf.ln(10)
    pdf.set_font(_FONT, "", 11)
    pdf.set_text_color(*_BODY_RGB)
    pdf.cell(0, 6, "Digital Verification", new_x="LMARGIN", new_y="NEXT", align="C")
    x = (pdf.w - RECEIPT_QR_SIZE_MM) / 2
    pdf.image(io.BytesIO(png_bytes), x=x, y=pdf.get_y(), w=RECEIPT_QR_SIZE_MM, h=RECEIPT_QR_SIZE_MM)
    pdf.ln(RECEIPT_QR_SIZE_MM + 2)
    pdf.set_font(_FONT, "", 9)
    pdf.set_text_color(*_MUTED_RGB)
    pdf.cell(0, 5, "Scan to verify order details", new_x="LMARGIN", new_y="NEXT", align="C")


def _verification_code_or_none(
    orders: list[Order], generated_at: datetime, code_generator: CodeGenerator
) -> bytes | None:
    try:
        return code_generator(build_verification_payload(orders, generated_at))
    except Exception as exc:
        logger.warning("verification_code_failed rows=%d error=%r", len(orders), exc)
        return None


def render_receipt(
    orders: Iterable[Order],
    generated_at: datetime | None = None,
    code_generator: CodeGenerator = generate_verification_code,
) -> bytes:
    """Render the receipt PDF. A failing code generator only drops the QR block."""
    order_list = list(orders)
    stamp = generated_at or datetime.now(timezone.utc)
    summary = summarize_orders(order_list)

    pdf = ReceiptPDF(stamp)
    pdf.add_page()
    _draw_header(pdf, stamp)
    _draw_bar_chart(pdf, summary)
    _draw_order_details(pdf, summary)
    _draw_totals(pdf, summary)

    png_bytes = _verification_code_or_none(order_list, stamp, code_generator)
    if png_bytes is not None:
        _draw_verification(pdf, png_bytes)

    return bytes(pdf.output())


def export_receipt(
    orders: Iterable[Order],
    export_dir: str | Path = EXPORT_DIR,
    generated_at: datetime | None = None,
    renderer: ReceiptRenderer = render_receipt,
) -> Path:
    """Render and write the receipt, returning the written path."""
    stamp = generated_at or datetime.now(timezone.utc)
    document = renderer(list(orders), generated_at=stamp)
    out_dir = Path(export_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / receipt_filename(stamp)
    out_path.write_bytes(document)
    logger.info("receipt_exported path=%s bytes=%d", out_path, len(document))
    return out_path
