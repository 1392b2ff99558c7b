"""
PDF Quote Generator.

Renders a built quote (see QuoteBuilder.build_quote) as a one-page PDF.
Uses fpdf2 (pure Python, no system dependencies).

Sections:
1. Header (company, date, material)
2. Sticker table
3. Totals
4. Notes (rounded corners, minimum order)
"""

from datetime import datetime

from fpdf import FPDF

from .config import settings
from .quote_builder import fmt_money, fmt_rate

PDF_FILENAME = "StickerKing-Quote.pdf"


def _safe(text: str) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        text
        .replace("•", "-")    # bullet
        .replace("—", " - ")  # em dash
        .replace("–", "-")    # en dash
        .replace("×", "x")    # multiplication sign
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


class QuotePDF(FPDF):
    """PDF document with the shop's section and table styling."""

    def __init__(self, company_name=""):
        super().__init__()
        self.company_name = company_name
        self.set_auto_page_break(auto=True, margin=20)

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, f"Page {self.page_no()}/{{nb}}", align="C")

    def section_header(self, title):
        """Render a section header bar."""
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(45, 55, 72)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def table_header(self, cols):
        """Render a table header row. cols: [(label, width), ...]"""
        self.set_font("Helvetica", "B", 8)
        self.set_fill_color(240, 240, 240)
        for label, width in cols:
            align = "L" if label == "Size" else "R"
            self.cell(width, 6, label, border="B", fill=True, align=align)
        self.ln()

    def table_row(self, values, widths):
        self.set_font("Helvetica", "", 8)
        for i, (val, width) in enumerate(zip(values, widths)):
            self.cell(width, 5.5, _safe(str(val)), align="L" if i == 0 else "R")
        self.ln()

    def total_row(self, label, amount, bold=False):
        self.set_font("Helvetica", "B" if bold else "", 10)
        self.cell(130, 6, label)
        self.cell(60, 6, amount, align="R")
        self.ln()


def generate_quote_pdf(quote: dict, company_name: str = None, currency: str = None) -> bytes:
    """
    Generate a PDF quote document.

    Args:
        quote: quote dict from QuoteBuilder.build_quote
        company_name: header name, defaults to settings.COMPANY_NAME
        currency: currency symbol, defaults to settings.CURRENCY_SYMBOL

    Returns:
        PDF bytes
    """
    company_name = company_name or settings.COMPANY_NAME
    currency = settings.CURRENCY_SYMBOL if currency is None else currency
    include_vat = quote.get("include_vat", False)

    pdf = QuotePDF(company_name=company_name)
    pdf.alias_nb_pages()
    pdf.add_page()
    pw = pdf.w - pdf.l_margin - pdf.r_margin  # printable width

    # ── Header ──
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _safe(pdf.company_name), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(2)

    created = quote.get("created_at", "")
    try:
        date_str = datetime.fromisoformat(created).strftime("%B %d, %Y")
    except (ValueError, TypeError):
        date_str = datetime.utcnow().strftime("%B %d, %Y")

    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, "STICKER QUOTE", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, f"Date: {date_str}", new_x="LMARGIN", new_y="NEXT")
    material = quote.get("material_name") or quote.get("material", "")
    pdf.cell(0, 5, _safe(f"Material: {material}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(6)

    # ── Stickers ──
    pdf.section_header("STICKERS")
    cols = [("Size", 40), ("Per Sticker", 28), ("Per Row", 20), ("Rows", 18),
            ("Stickers", 22), ("Excl VAT", 31), ("Incl VAT", 31)]
    if not include_vat:
        cols = cols[:-1]
    widths = [c[1] for c in cols]
    pdf.table_header(cols)

    for line in quote.get("stickers", []):
        size = f"{line['width']} x {line['height']} mm"
        if not line["valid"]:
            pdf.set_font("Helvetica", "I", 8)
            pdf.set_text_color(170, 40, 40)
            pdf.cell(pw, 5.5, _safe(f"Sticker {line['index']} ({size}): {line['error']}"),
                     new_x="LMARGIN", new_y="NEXT")
            pdf.set_text_color(0, 0, 0)
            continue
        values = [
            size,
            f"{currency}{line['price']}",
            line["stickers_per_row"],
            line["rows"],
            line["total_stickers"],
            fmt_money(line["total_excl_vat"], currency),
        ]
        if include_vat:
            values.append(fmt_money(line["total_incl_vat"], currency))
        pdf.table_row(values, widths)

    pdf.ln(4)

    # ── Totals ──
    pdf.section_header("TOTAL")
    pdf.total_row("Total excl VAT", fmt_money(quote.get("total_excl_vat", 0), currency), bold=True)
    if include_vat:
        vat_label = f"Total incl VAT ({fmt_rate(quote.get('vat_rate', 0))}%)"
        pdf.total_row(vat_label, fmt_money(quote.get("total_incl_vat", 0), currency), bold=True)
    pdf.ln(4)

    # ── Notes ──
    notes = []
    if quote.get("rounded_corners"):
        notes.append("Rounded corners requested.")
    if quote.get("below_minimum"):
        notes.append(
            f"Minimum order amount is {fmt_money(quote.get('min_order_amount', 0), currency)} excl VAT."
        )
    notes.append("Prices are per sticker and billed per full row across the roll.")

    pdf.section_header("NOTES")
    pdf.set_font("Helvetica", "", 8)
    for note in notes:
        pdf.set_x(pdf.l_margin)
        pdf.cell(pw, 4.5, _safe(f"  - {note}"), new_x="LMARGIN", new_y="NEXT")

    return bytes(pdf.output())
