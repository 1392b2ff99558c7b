"""
Quote endpoints.

POST /api/quote     : price every sticker line and total the quote
POST /api/quote/pdf : same quote, downloaded as StickerKing-Quote.pdf
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import Response

from .. import schemas
from ..calculators.sticker_price import StickerPriceCalculator
from ..pdf_generator import PDF_FILENAME, generate_quote_pdf
from ..quote_builder import QuoteBuilder, render_quote_text
from .pricing import get_calculator

router = APIRouter(prefix="/quote", tags=["quotes"])


def _build(request: schemas.QuoteRequest, calc: StickerPriceCalculator) -> dict:
    builder = QuoteBuilder(calc)
    try:
        return builder.build_quote(
            stickers=[s.model_dump() for s in request.stickers],
            material=request.material,
            vat_rate=request.vat_rate,
            include_vat=request.include_vat,
            rounded_corners=request.rounded_corners,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.post("", response_model=schemas.QuoteResponse)
def build_quote(
    request: schemas.QuoteRequest,
    calc: StickerPriceCalculator = Depends(get_calculator),
):
    quote = _build(request, calc)
    quote["text"] = render_quote_text(quote)
    return quote


@router.post("/pdf")
def download_quote_pdf(
    request: schemas.QuoteRequest,
    calc: StickerPriceCalculator = Depends(get_calculator),
):
    """Returns: application/pdf"""
    quote = _build(request, calc)
    pdf_bytes = generate_quote_pdf(quote)
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={
            "Content-Disposition": f'attachment; filename="{PDF_FILENAME}"',
        },
    )
