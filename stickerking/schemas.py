from decimal import Decimal
from pydantic import BaseModel
from typing import Optional, List, Union
from .calculators.materials import UNSPECIFIED
from .config import settings

# Form inputs arrive as strings from the sidebar; numbers are accepted too
FormNumber = Optional[Union[float, str]]


class StickerLine(BaseModel):
    width: FormNumber = None
    height: FormNumber = None
    quantity: FormNumber = None


class PriceRequest(BaseModel):
    width: FormNumber = None
    height: FormNumber = None
    material: str = UNSPECIFIED


class PriceResponse(BaseModel):
    price: str
    stickersPerRow: Optional[int] = None


class MaterialInfo(BaseModel):
    key: str
    name: str
    price_per_m2: float
    quotable: bool


class QuoteRequest(BaseModel):
    stickers: List[StickerLine] = []
    material: str = UNSPECIFIED
    vat_rate: Optional[float] = None
    include_vat: bool = False
    rounded_corners: bool = False


class QuoteLine(BaseModel):
    index: int
    width: str
    height: str
    quantity: str
    valid: bool
    error: Optional[str] = None
    price: Optional[str] = None
    price_per_sticker: Optional[Decimal] = None
    stickers_per_row: Optional[int] = None
    rows: Optional[int] = None
    total_stickers: Optional[int] = None
    total_excl_vat: Optional[Decimal] = None
    total_incl_vat: Optional[Decimal] = None


class QuoteResponse(BaseModel):
    material: str
    material_name: str
    vat_rate: Decimal
    include_vat: bool
    rounded_corners: bool
    stickers: List[QuoteLine] = []
    total_excl_vat: Decimal
    total_incl_vat: Decimal
    min_order_amount: Decimal
    below_minimum: bool
    created_at: str
    text: str


class SavedQuote(BaseModel):
    name: str
    stickers: List[StickerLine] = []


class SavedQuoteCreate(BaseModel):
    name: str
    stickers: Optional[List[StickerLine]] = None  # defaults to the current sticker lines


class AppState(BaseModel):
    vat_rate: float = settings.DEFAULT_VAT_RATE
    include_vat: bool = False
    dark_mode: bool = False
    material: str = UNSPECIFIED
    rounded_corners: bool = False
    stickers: List[StickerLine] = []
    saved_quotes: List[SavedQuote] = []
