"""
Sticker price calculator tests.

Tests:
1-4.   Invalid input (width, height, material, ordering)
5-10.  Reference prices for 100 x 100mm stickers on every material
11-14. Row packing (fit, sticker wider than roll, monotonic width)
15-17. Rounding and minimum price floor
18-23. Input coercion from form strings, out-of-range sizes
24-27. Config, idempotence, wire format
"""

from decimal import Decimal

import pytest

from stickerking.calculators import materials
from stickerking.calculators.materials import MaterialCatalog
from stickerking.calculators.sticker_price import (
    INVALID_DIMENSIONS,
    InvalidPrice,
    LayoutConstants,
    PricingConfig,
    StickerPriceCalculator,
    ValidPrice,
    calculate_price,
    parse_decimal,
)


# ============================================================
# 1-4. Invalid input
# ============================================================

@pytest.mark.parametrize("width", [0, -1, -100, "0", "-50"])
def test_non_positive_width_is_invalid(calculator, width):
    result = calculator.calculate(width, 100, "print_only")
    assert isinstance(result, InvalidPrice)
    assert result.price == INVALID_DIMENSIONS
    assert result.stickers_per_row is None


@pytest.mark.parametrize("height", [0, -50, "-0.5"])
def test_non_positive_height_is_invalid(calculator, height):
    result = calculator.calculate(100, height, "print_only")
    assert result.price == "Invalid dimensions"
    assert result.stickers_per_row is None


@pytest.mark.parametrize("material", ["unspecified", "gold_foil", "", None])
def test_unpriced_material_is_invalid(calculator, material):
    """unspecified is priced at 0; unknown keys resolve to 0 too."""
    result = calculator.calculate(100, 100, material)
    assert not result.is_valid
    assert result.price == INVALID_DIMENSIONS


def test_validation_order_width_first(calculator):
    """Width is checked before height, height before material."""
    assert calculator.calculate(0, 0, "unspecified").reason.startswith("width")
    assert calculator.calculate(100, 0, "unspecified").reason.startswith("height")
    assert calculator.calculate(100, 100, "unspecified").reason.startswith("material")


def test_material_must_be_quotable():
    """A zero or negative catalog price never reaches the row arithmetic."""
    config = PricingConfig(catalog=MaterialCatalog({"free": Decimal("0"), "credit": Decimal("-5")}))
    calc = StickerPriceCalculator(config)
    assert not config.catalog.is_quotable("credit")
    assert calc.calculate(100, 100, "free").reason.startswith("material")
    assert calc.calculate(100, 100, "credit").reason.startswith("material")


# ============================================================
# 5-10. Reference prices: 100 x 100mm, 6 per row
# ============================================================

@pytest.mark.parametrize("material,expected", [
    ("print_only", "4.98"),      # 0.65 * 0.1 * 460 = 29.9   / 6 = 4.9833
    ("cut_contour", "6.07"),     # 0.65 * 0.1 * 560 = 36.4   / 6 = 6.0666
    ("poster", "4.33"),          # 0.65 * 0.1 * 400 = 26     / 6 = 4.3333
    ("uv_lamination", "8.67"),   # 0.65 * 0.1 * 800 = 52     / 6 = 8.6666
    ("chromadeck", "24.92"),     # 0.65 * 0.1 * 2300 = 149.5 / 6 = 24.9166
    ("iron_on", "10.51"),        # 0.65 * 0.1 * 970 = 63.05  / 6 = 10.5083
])
def test_reference_prices(calculator, material, expected):
    result = calculator.calculate(100, 100, material)
    assert isinstance(result, ValidPrice)
    assert result.price == expected
    assert result.stickers_per_row == 6  # floor(650 / 101)


# ============================================================
# 11-14. Row packing
# ============================================================

def test_small_sticker_packing(calculator):
    """50 x 50mm: floor(650 / 51) = 12 per row; 0.65 * 0.05 * 460 / 12 = 1.2458"""
    result = calculator.calculate(50, 50, "print_only")
    assert result.stickers_per_row == 12
    assert result.price == "1.25"


def test_single_sticker_per_row(calculator):
    """649mm + 1mm bleed fills the roll exactly: one sticker carries the whole row."""
    result = calculator.calculate(649, 100, "print_only")
    assert result.stickers_per_row == 1
    assert result.price == "29.90"


def test_sticker_wider_than_roll_is_invalid(calculator):
    """650mm + bleed no longer fits: zero per row is never priced."""
    result = calculator.calculate(650, 100, "print_only")
    assert isinstance(result, InvalidPrice)
    assert result.price == INVALID_DIMENSIONS
    assert result.stickers_per_row is None
    assert not calculator.calculate(2000, 100, "print_only").is_valid


def test_wider_sticker_never_fits_more_per_row(calculator):
    previous = None
    for width in range(1, 650):
        result = calculator.calculate(width, 80, "cut_contour")
        assert result.is_valid
        if previous is not None:
            assert result.stickers_per_row <= previous
        previous = result.stickers_per_row


# ============================================================
# 15-17. Rounding and minimum price floor
# ============================================================

def _exact_config(unit_price):
    """1m roll, no bleed, 500mm sticker → 2 per row, 1m tall row = 1 m²."""
    return PricingConfig(
        catalog=MaterialCatalog({"test": Decimal(unit_price)}),
        layout=LayoutConstants(roll_width_mm=1000, bleed_mm=0),
    )


def test_rounding_is_half_up():
    """0.125 rounds to 0.13 (banker's rounding would give 0.12)."""
    assert calculate_price(500, 1000, "test", config=_exact_config("0.25")).price == "0.13"
    assert calculate_price(500, 1000, "test", config=_exact_config("0.01")).price == "0.01"
    assert calculate_price(500, 1000, "test", config=_exact_config("0.29")).price == "0.15"


def test_min_price_not_enforced_by_default(calculator):
    """10 x 10mm: 59 per row, 2.99 / 59 = 0.0507: below the 0.20 floor but reported as is."""
    result = calculator.calculate(10, 10, "print_only")
    assert result.stickers_per_row == 59
    assert result.price == "0.05"


def test_min_price_floor_when_enforced(pricing_config):
    config = PricingConfig(
        catalog=pricing_config.catalog,
        layout=pricing_config.layout,
        enforce_min_price=True,
    )
    calc = StickerPriceCalculator(config)
    assert calc.calculate(10, 10, "print_only").price == "0.20"
    # Prices above the floor are untouched
    assert calc.calculate(100, 100, "print_only").price == "4.98"


# ============================================================
# 18-23. Input coercion and out-of-range sizes
# ============================================================

@pytest.mark.parametrize("width,height", [
    ("100", "100"),
    (" 100 ", "100"),
    ("100mm", "100 mm"),
    (100.0, 100),
    (Decimal("100"), "1e2"),
])
def test_form_values_are_coerced(calculator, width, height):
    result = calculator.calculate(width, height, "print_only")
    assert result.price == "4.98"


@pytest.mark.parametrize("bad", ["", "abc", None, "nan", "inf", "-inf", True, "10x10"])
def test_unparseable_dimensions_are_invalid(calculator, bad):
    assert calculator.calculate(bad, 100, "print_only").price == INVALID_DIMENSIONS
    assert calculator.calculate(100, bad, "print_only").price == INVALID_DIMENSIONS


def test_parse_decimal():
    assert parse_decimal("12.5") == Decimal("12.5")
    assert parse_decimal(7) == Decimal("7")
    assert parse_decimal("  3mm") == Decimal("3")
    assert parse_decimal("NaN") is None
    assert parse_decimal(False) is None


def test_fractional_dimensions(calculator):
    """99.5mm + 1mm bleed = 100.5mm → 6 per row."""
    result = calculator.calculate("99.5", 100, "print_only")
    assert result.stickers_per_row == 6


@pytest.mark.parametrize("width,height", [
    (100, "1e9999999"),
    ("1e9999999", 100),
])
def test_out_of_range_dimensions_are_invalid(calculator, width, height):
    """Finite but past the decimal context's exponent limit."""
    result = calculator.calculate(width, height, "print_only")
    assert result.price == INVALID_DIMENSIONS
    assert result.stickers_per_row is None
    assert result.reason == "dimensions out of range"


def test_tiny_width_without_bleed_is_invalid():
    """1000mm // 1e-30mm has more digits than the decimal context holds."""
    result = calculate_price("1e-30", 1000, "test", config=_exact_config("1"))
    assert result.price == INVALID_DIMENSIONS
    assert result.reason == "dimensions out of range"


# ============================================================
# 24-27. Config, idempotence, wire format
# ============================================================

def test_repeated_calls_identical(calculator):
    first = calculator.calculate(73, 41, "chromadeck")
    for _ in range(5):
        assert calculator.calculate(73, 41, "chromadeck") == first


def test_default_config_matches_shop_layout():
    """Module-level calculate_price uses settings: 650mm roll, 1mm bleed."""
    assert calculate_price(100, 100, "print_only").price == "4.98"
    assert calculate_price(100, 100, "unspecified").price == INVALID_DIMENSIONS


def test_layout_constants_validation():
    with pytest.raises(ValueError):
        LayoutConstants(roll_width_mm=0)
    with pytest.raises(ValueError):
        LayoutConstants(bleed_mm=-1)
    with pytest.raises(ValueError):
        LayoutConstants(min_price_per_sticker=-0.01)
    layout = LayoutConstants(roll_width_mm=650.0, bleed_mm=1)
    assert layout.roll_width_m == Decimal("0.65")


def test_wire_format(calculator):
    assert calculator.calculate(100, 100, "poster").to_dict() == {
        "price": "4.33", "stickersPerRow": 6,
    }
    assert calculator.calculate(0, 100, "poster").to_dict() == {
        "price": "Invalid dimensions", "stickersPerRow": None,
    }


def test_catalog_contents():
    catalog = MaterialCatalog()
    assert catalog.get_unit_price("print_only") == Decimal("460")
    assert catalog.get_unit_price("unspecified") == 0
    assert catalog.get_unit_price("nope") == 0
    assert not catalog.is_quotable("unspecified")
    assert catalog.is_quotable("iron_on")
    assert "chromadeck" in catalog
    assert len(catalog) == len(materials.MATERIAL_PRICES) == 7
    assert catalog.get_display_name("cut_contour") == "Print & Cut Contour"
    assert catalog.get_display_name("holo_film") == "Holo Film"
    listed = catalog.list_materials()
    assert listed[0] == {"key": "unspecified", "name": "Unspecified",
                         "price_per_m2": 0.0, "quotable": False}
