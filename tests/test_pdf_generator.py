"""
PDF export tests.

Tests:
1-2. PDF bytes for a normal quote, with and without VAT
3.   Invalid lines and notes render
4.   Company name on the document class
"""

from stickerking.pdf_generator import PDF_FILENAME, QuotePDF, generate_quote_pdf
from stickerking.quote_builder import QuoteBuilder


def _quote(calculator, **kwargs):
    stickers = [
        {"width": 100, "height": 100, "quantity": 10},
        {"width": "50", "height": "50", "quantity": "100"},
    ]
    return QuoteBuilder(calculator).build_quote(stickers, "cut_contour", **kwargs)


def test_pdf_generates_valid_bytes(calculator):
    pdf_bytes = generate_quote_pdf(_quote(calculator), company_name="Sticker King")
    assert isinstance(pdf_bytes, bytes)
    assert pdf_bytes[:5] == b"%PDF-"
    assert len(pdf_bytes) > 1000


def test_pdf_with_vat_column(calculator):
    pdf_bytes = generate_quote_pdf(_quote(calculator, include_vat=True, vat_rate=15))
    assert pdf_bytes[:5] == b"%PDF-"
    assert "/Count" in pdf_bytes.decode("latin-1")


def test_pdf_with_invalid_lines_and_notes(calculator):
    quote = QuoteBuilder(calculator).build_quote(
        [{"width": "0", "height": "10", "quantity": "1"},
         {"width": "10", "height": "10", "quantity": ""}],
        "poster",
        rounded_corners=True,
    )
    assert quote["below_minimum"] is True
    pdf_bytes = generate_quote_pdf(quote, company_name="Sticker King — Cape Town")
    assert pdf_bytes[:5] == b"%PDF-"


def test_pdf_document_keeps_company_name():
    assert QuotePDF(company_name="Sticker King").company_name == "Sticker King"
    assert PDF_FILENAME == "StickerKing-Quote.pdf"
