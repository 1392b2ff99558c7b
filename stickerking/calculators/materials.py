"""
Material catalog: unit price per square meter for each printable material.

Prices are in the quote currency (ZAR) per m² of roll, excluding VAT.
"unspecified" is the sidebar's default selection and is priced at 0 so it
can never produce a quote.
"""

import logging
from decimal import Decimal
from types import MappingProxyType

logger = logging.getLogger(__name__)

UNSPECIFIED = "unspecified"

# Price per m² (excl VAT)
MATERIAL_PRICES = MappingProxyType({
    UNSPECIFIED: Decimal("0.00"),
    "print_only": Decimal("460.00"),
    "cut_contour": Decimal("560.00"),
    "uv_lamination": Decimal("800.00"),
    "chromadeck": Decimal("2300.00"),
    "poster": Decimal("400.00"),
    "iron_on": Decimal("970.00"),
})

MATERIAL_NAMES = MappingProxyType({
    UNSPECIFIED: "Unspecified",
    "print_only": "Print Only",
    "cut_contour": "Print & Cut Contour",
    "uv_lamination": "UV Lamination",
    "chromadeck": "Chromadeck",
    "poster": "Poster",
    "iron_on": "Iron-On",
})


class MaterialCatalog:
    """
    Read-only view over a material price table.

    Unknown keys resolve to a zero price, which the calculator treats the
    same as "unspecified".
    """

    def __init__(self, prices=None, names=None):
        self._prices = MappingProxyType(dict(prices if prices is not None else MATERIAL_PRICES))
        self._names = MappingProxyType(dict(names if names is not None else MATERIAL_NAMES))

    def get_unit_price(self, material_key: str) -> Decimal:
        """Price per m² for a material key, or 0 when the key is unknown."""
        price = self._prices.get(material_key)
        if price is None:
            logger.debug("Unknown material key %r: priced at 0", material_key)
            return Decimal("0")
        return Decimal(price)

    def is_quotable(self, material_key: str) -> bool:
        """Only materials with a positive price can produce a quote."""
        return self.get_unit_price(material_key) > 0

    def get_display_name(self, material_key: str) -> str:
        if material_key in self._names:
            return self._names[material_key]
        return str(material_key).replace("_", " ").title()

    def list_materials(self) -> list[dict]:
        """All materials in catalog order, including the unspecified sentinel."""
        return [
            {
                "key": key,
                "name": self.get_display_name(key),
                "price_per_m2": float(price),
                "quotable": self.is_quotable(key),
            }
            for key, price in self._prices.items()
        ]

    def __contains__(self, material_key) -> bool:
        return material_key in self._prices

    def __len__(self) -> int:
        return len(self._prices)
