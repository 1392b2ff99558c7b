from fastapi import APIRouter, Depends
from typing import List
from .. import schemas
from ..calculators.sticker_price import StickerPriceCalculator
from .pricing import get_calculator

router = APIRouter(prefix="/materials", tags=["materials"])


@router.get("/", response_model=List[schemas.MaterialInfo])
def list_materials(calc: StickerPriceCalculator = Depends(get_calculator)):
    """Material catalog in sidebar order, including the unspecified placeholder."""
    return calc.config.catalog.list_materials()
