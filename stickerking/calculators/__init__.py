"""
Sticker pricing engine.

Pure Decimal math. No I/O.
Given sticker dimensions and a material key, produce the per-sticker price
and how many stickers share one production row.
"""

from .materials import MaterialCatalog, MATERIAL_PRICES, UNSPECIFIED
from .sticker_price import (
    INVALID_DIMENSIONS,
    InvalidPrice,
    LayoutConstants,
    PricingConfig,
    StickerPriceCalculator,
    ValidPrice,
    calculate_price,
    config_from_settings,
)
