"""
Per-sticker price calculator.

Stickers are printed in rows across a fixed-width roll. A row is billed as
the full roll width times the sticker height at the material's m² rate, and
that cost is shared by however many stickers fit side by side in the row.

    width_with_bleed = width + bleed
    stickers_per_row = floor(roll_width / width_with_bleed)
    row_cost         = roll_width_m * height_m * unit_price
    price            = row_cost / stickers_per_row   (2 dp, half-up)

Invalid input is an expected outcome while the user is still typing, so it
is returned as an InvalidPrice value rather than raised.
"""

import logging
from dataclasses import dataclass, field
from decimal import Decimal, DecimalException, InvalidOperation, ROUND_HALF_UP
from typing import Optional, Union

from ..config import settings
from .materials import MaterialCatalog

logger = logging.getLogger(__name__)

INVALID_DIMENSIONS = "Invalid dimensions"

MM_PER_M = Decimal("1000")
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class LayoutConstants:
    """Roll geometry and pricing floor. Lengths in mm."""
    roll_width_mm: Decimal = Decimal("650")
    bleed_mm: Decimal = Decimal("1")
    min_price_per_sticker: Decimal = Decimal("0.20")

    def __post_init__(self):
        for name in ("roll_width_mm", "bleed_mm", "min_price_per_sticker"):
            object.__setattr__(self, name, Decimal(str(getattr(self, name))))
        if self.roll_width_mm <= 0:
            raise ValueError(f"roll_width_mm must be positive, got {self.roll_width_mm}")
        if self.bleed_mm < 0:
            raise ValueError(f"bleed_mm must be non-negative, got {self.bleed_mm}")
        if self.min_price_per_sticker < 0:
            raise ValueError(
                f"min_price_per_sticker must be non-negative, got {self.min_price_per_sticker}"
            )

    @property
    def roll_width_m(self) -> Decimal:
        return self.roll_width_mm / MM_PER_M


@dataclass(frozen=True)
class PricingConfig:
    """Everything the calculator needs besides the sticker itself."""
    catalog: MaterialCatalog = field(default_factory=MaterialCatalog)
    layout: LayoutConstants = field(default_factory=LayoutConstants)
    enforce_min_price: bool = False


def config_from_settings(s=settings) -> PricingConfig:
    """Build the application's PricingConfig from environment settings."""
    return PricingConfig(
        catalog=MaterialCatalog(),
        layout=LayoutConstants(
            roll_width_mm=s.ROLL_WIDTH_MM,
            bleed_mm=s.BLEED_MM,
            min_price_per_sticker=s.MIN_PRICE_PER_STICKER,
        ),
        enforce_min_price=s.ENFORCE_MIN_PRICE,
    )


# --- Result types ---

@dataclass(frozen=True)
class ValidPrice:
    price_per_sticker: Decimal
    stickers_per_row: int

    is_valid = True

    @property
    def price(self) -> str:
        """Fixed-point string with exactly two decimals, e.g. "4.98"."""
        return f"{self.price_per_sticker:.2f}"

    def to_dict(self) -> dict:
        return {"price": self.price, "stickersPerRow": self.stickers_per_row}


@dataclass(frozen=True)
class InvalidPrice:
    reason: str = INVALID_DIMENSIONS

    is_valid = False
    stickers_per_row = None

    @property
    def price(self) -> str:
        return INVALID_DIMENSIONS

    def to_dict(self) -> dict:
        return {"price": self.price, "stickersPerRow": None}


PriceQuote = Union[ValidPrice, InvalidPrice]


def parse_decimal(value) -> Optional[Decimal]:
    """
    Coerce a form value to Decimal. Accepts numbers and numeric strings
    (optionally suffixed with "mm"). Returns None for anything unparseable
    or non-finite.
    """
    if value is None or isinstance(value, bool):
        return None
    text = str(value).strip().lower()
    if text.endswith("mm"):
        text = text[:-2].strip()
    if not text:
        return None
    try:
        number = Decimal(text)
    except InvalidOperation:
        return None
    if not number.is_finite():
        return None
    return number


class StickerPriceCalculator:
    """Prices a single sticker size on a given material."""

    def __init__(self, config: PricingConfig = None):
        self.config = config or config_from_settings()

    def calculate(self, width, height, material_key: str) -> PriceQuote:
        width_mm = parse_decimal(width)
        if width_mm is None or width_mm <= 0:
            return InvalidPrice("width must be a positive number")

        height_mm = parse_decimal(height)
        if height_mm is None or height_mm <= 0:
            return InvalidPrice("height must be a positive number")

        catalog = self.config.catalog
        if not catalog.is_quotable(material_key):
            return InvalidPrice(f"material {material_key!r} has no price")
        unit_price = catalog.get_unit_price(material_key)

        # Finite but extreme sizes (1e9999999, 1e-30) exceed the decimal context
        try:
            stickers_per_row = self.stickers_per_row(width_mm)
            if stickers_per_row < 1:
                logger.debug("Sticker %smm wide does not fit on the roll", width_mm)
                return InvalidPrice("sticker wider than roll")

            row_cost = self.row_cost(height_mm, unit_price)
            price = (row_cost / stickers_per_row).quantize(CENTS, rounding=ROUND_HALF_UP)
        except DecimalException:
            logger.debug("Sticker %sx%smm is out of range", width_mm, height_mm)
            return InvalidPrice("dimensions out of range")

        if self.config.enforce_min_price:
            floor_price = self.config.layout.min_price_per_sticker.quantize(
                CENTS, rounding=ROUND_HALF_UP)
            price = max(price, floor_price)

        return ValidPrice(price_per_sticker=price, stickers_per_row=stickers_per_row)

    def stickers_per_row(self, width_mm: Decimal) -> int:
        """How many stickers fit across the roll, with bleed between them."""
        layout = self.config.layout
        width_with_bleed = width_mm + layout.bleed_mm
        return int(layout.roll_width_mm // width_with_bleed)

    def row_cost(self, height_mm: Decimal, unit_price: Decimal) -> Decimal:
        """Cost of one full-width row of the given height."""
        return self.config.layout.roll_width_m * (height_mm / MM_PER_M) * unit_price


_default_calculator = None


def calculate_price(width, height, material_key: str, config: PricingConfig = None) -> PriceQuote:
    """Price one sticker. Uses the settings-derived config unless one is given."""
    global _default_calculator
    if config is not None:
        return StickerPriceCalculator(config).calculate(width, height, material_key)
    if _default_calculator is None:
        _default_calculator = StickerPriceCalculator()
    return _default_calculator.calculate(width, height, material_key)
