"""
Single-sticker pricing endpoint.

POST /api/price - price one sticker size on one material

Invalid dimensions or material are a normal result (HTTP 200 with the
"Invalid dimensions" price), since the sidebar prices while the user types.
"""

import logging

from fastapi import APIRouter, Depends

from .. import schemas
from ..calculators.sticker_price import StickerPriceCalculator

logger = logging.getLogger(__name__)

router = APIRouter(tags=["pricing"])

# Singleton calculator: immutable config, no state
calculator = StickerPriceCalculator()


def get_calculator() -> StickerPriceCalculator:
    return calculator


@router.post("/price", response_model=schemas.PriceResponse)
def price_sticker(
    request: schemas.PriceRequest,
    calc: StickerPriceCalculator = Depends(get_calculator),
):
    result = calc.calculate(request.width, request.height, request.material)
    if not result.is_valid:
        logger.debug("Invalid price request %s: %s", request.model_dump(), result.reason)
    return result.to_dict()
