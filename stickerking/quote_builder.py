"""
Quote Builder.

Aggregates per-sticker prices into a full quote for one material.
Pure math: quantity rounded up to whole rows, price × stickers, VAT on top.

Input: list of sticker lines {width, height, quantity} + quote settings
Output: quote dict (see build_quote) and its shareable plain-text rendering
"""

import logging
from datetime import datetime
from decimal import Decimal, DecimalException, ROUND_HALF_UP

from .calculators.sticker_price import (
    INVALID_DIMENSIONS,
    StickerPriceCalculator,
    parse_decimal,
)
from .config import settings

logger = logging.getLogger(__name__)

INVALID_QUANTITY = "Invalid quantity"
CENTS = Decimal("0.01")


def _money(amount) -> Decimal:
    return Decimal(amount).quantize(CENTS, rounding=ROUND_HALF_UP)


def _display(value) -> str:
    """Echo a form value back the way a user would type it: 100, 52.5."""
    number = parse_decimal(value)
    if number is None:
        return "" if value is None else str(value).strip()
    return format(number.normalize(), "f")


class QuoteBuilder:
    """
    Assembles a quote from sticker lines.
    Every line on a quote shares the quote's material.
    """

    def __init__(self, calculator: StickerPriceCalculator = None,
                 default_vat_rate: float = None, min_order_amount: float = None):
        self.calculator = calculator or StickerPriceCalculator()
        self.default_vat_rate = Decimal(str(
            settings.DEFAULT_VAT_RATE if default_vat_rate is None else default_vat_rate))
        self.min_order_amount = _money(str(
            settings.MIN_ORDER_AMOUNT if min_order_amount is None else min_order_amount))

    def build_quote(self, stickers: list, material: str, vat_rate=None,
                    include_vat: bool = False, rounded_corners: bool = False) -> dict:
        """
        Price every sticker line and total the quote.

        Args:
            stickers: [{"width": ..., "height": ..., "quantity": ...}, ...]
                      values may be numbers or form strings
            material: material key from the catalog
            vat_rate: percent (e.g. 15), defaults to settings.DEFAULT_VAT_RATE
            include_vat: show VAT-inclusive amounts per line
            rounded_corners: carried through to the rendered quote

        Returns:
            {
                material, material_name, vat_rate, include_vat, rounded_corners,
                stickers: [line, ...],
                total_excl_vat, total_incl_vat,
                min_order_amount, below_minimum,
                created_at,
            }
        """
        vat = self._parse_vat_rate(vat_rate)
        try:
            vat_multiplier = 1 + vat / 100
        except DecimalException:
            raise ValueError(f"VAT rate is out of range, got {vat_rate!r}")

        lines = [
            self._build_line(index, sticker, material, vat_multiplier)
            for index, sticker in enumerate(stickers or [], start=1)
        ]

        try:
            total_excl_vat = self._calculate_total(lines)
            total_incl_vat = _money(total_excl_vat * vat_multiplier)
        except DecimalException:
            raise ValueError("Quote total is too large to price")

        logger.debug(
            "Quote built: %d lines (%d valid), material=%s, total excl VAT %s",
            len(lines), sum(1 for line in lines if line["valid"]), material, total_excl_vat,
        )

        return {
            "material": material,
            "material_name": self.calculator.config.catalog.get_display_name(material),
            "vat_rate": vat,
            "include_vat": bool(include_vat),
            "rounded_corners": bool(rounded_corners),
            "stickers": lines,
            "total_excl_vat": total_excl_vat,
            "total_incl_vat": total_incl_vat,
            "min_order_amount": self.min_order_amount,
            "below_minimum": total_excl_vat < self.min_order_amount,
            "created_at": datetime.utcnow().isoformat(),
        }

    def _build_line(self, index: int, sticker: dict, material: str,
                    vat_multiplier: Decimal) -> dict:
        width = sticker.get("width")
        height = sticker.get("height")
        quantity_raw = sticker.get("quantity")
        line = {
            "index": index,
            "width": _display(width),
            "height": _display(height),
            "quantity": _display(quantity_raw),
        }

        result = self.calculator.calculate(width, height, material)
        if not result.is_valid:
            line.update(valid=False, error=INVALID_DIMENSIONS)
            return line

        quantity = self._parse_quantity(quantity_raw)
        if quantity is None:
            line.update(valid=False, error=INVALID_QUANTITY)
            return line

        # Billed in whole rows: a partly filled row costs the same as a full one
        rows = -(-quantity // result.stickers_per_row)
        total_stickers = rows * result.stickers_per_row
        try:
            total_excl_vat = _money(result.price_per_sticker * total_stickers)
            total_incl_vat = _money(total_excl_vat * vat_multiplier)
        except DecimalException:
            logger.debug("Quantity %s on line %d cannot be totalled", quantity, index)
            line.update(valid=False, error=INVALID_QUANTITY)
            return line

        line.update(
            valid=True,
            price=result.price,
            price_per_sticker=result.price_per_sticker,
            stickers_per_row=result.stickers_per_row,
            rows=rows,
            total_stickers=total_stickers,
            total_excl_vat=total_excl_vat,
            total_incl_vat=total_incl_vat,
        )
        return line

    def _calculate_total(self, lines: list) -> Decimal:
        """Sum of valid line totals, excl VAT."""
        return _money(sum((line["total_excl_vat"] for line in lines if line["valid"]),
                          Decimal("0")))

    def _parse_quantity(self, value):
        """Positive whole number of stickers, or None."""
        number = parse_decimal(value)
        if number is None or number <= 0 or number != number.to_integral_value():
            return None
        return int(number)

    def _parse_vat_rate(self, value) -> Decimal:
        if value is None:
            return self.default_vat_rate
        rate = parse_decimal(value)
        if rate is None or rate < 0:
            raise ValueError(f"VAT rate must be a non-negative number, got {value!r}")
        return rate


def fmt_money(amount, currency: str) -> str:
    """Format an amount as R1234.56"""
    return f"{currency}{_money(amount):.2f}"


def fmt_rate(rate) -> str:
    return format(Decimal(rate).normalize(), "f")


def render_line_text(line: dict, include_vat: bool, currency: str = None) -> str:
    """One sticker line as it appears in the shareable quote."""
    currency = settings.CURRENCY_SYMBOL if currency is None else currency
    size = f"{line['width']}x{line['height']}mm"
    if not line["valid"]:
        return f"Sticker {line['index']} ({size}): {line['error']}"

    text = (
        f"{size} - {currency}{line['price']} excl VAT per sticker "
        f"({line['stickers_per_row']} stickers per row)\n"
        f"{line['rows']} rows - {line['total_stickers']} stickers\n"
        f"{fmt_money(line['total_excl_vat'], currency)} Excl VAT"
    )
    if include_vat:
        text += f"\nIncl VAT: {fmt_money(line['total_incl_vat'], currency)}"
    return text


def render_quote_text(quote: dict, currency: str = None, company_name: str = None) -> str:
    """
    Plain-text quote for copying to the clipboard or pasting into a chat.
    Sticker blocks are separated by blank lines.
    """
    currency = settings.CURRENCY_SYMBOL if currency is None else currency
    company_name = settings.COMPANY_NAME if company_name is None else company_name
    include_vat = quote.get("include_vat", False)

    parts = [
        f"{company_name} Quote",
        f"Material: {quote.get('material_name') or quote.get('material', '')}",
    ]
    if quote.get("rounded_corners"):
        parts.append("Rounded corners: Yes")

    blocks = [render_line_text(line, include_vat, currency) for line in quote.get("stickers", [])]

    totals = [f"Total: {fmt_money(quote.get('total_excl_vat', 0), currency)} Excl VAT"]
    if include_vat:
        totals.append(
            f"Total: {fmt_money(quote.get('total_incl_vat', 0), currency)} Incl VAT "
            f"({fmt_rate(quote.get('vat_rate', 0))}% VAT)"
        )
    if quote.get("below_minimum"):
        totals.append(
            f"Minimum order amount is {fmt_money(quote.get('min_order_amount', 0), currency)} Excl VAT"
        )

    return "\n\n".join(["\n".join(parts)] + blocks + ["\n".join(totals)])
