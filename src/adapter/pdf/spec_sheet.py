"""fpdf2 implementation of SpecSheetRenderer."""

from datetime import datetime, timezone
from decimal import Decimal

from fpdf import FPDF
from fpdf.enums import XPos, YPos

from domain.model.product import Product

TITLE = "Product Technical Sheet"
NO_DETAILS = "No technical details available for this product."

# Core PDF fonts only cover latin-1
_FONT = "Helvetica"


def _latin1(text) -> str:
    return str(text).encode('latin-1', 'replace').decode('latin-1')


class FpdfSpecSheetRenderer:
    def __init__(self, clock=None, compress: bool = True):
        self._clock = clock or (lambda: datetime.now(timezone.utc))
        self._compress = compress

    def _line(self, pdf: FPDF, text: str, size: int, align: str = "L", gap: float = 3) -> None:
        pdf.set_font(_FONT, size=size)
        pdf.multi_cell(0, size * 0.6, _latin1(text), align=align, new_x=XPos.LMARGIN, new_y=YPos.NEXT)
        pdf.ln(gap)

    def render(self, product: Product, price: Decimal | None = None) -> bytes:
        pdf = FPDF()
        pdf.set_compression(self._compress)
        pdf.set_title(_latin1(f"{TITLE} - {product.name}"))
        pdf.add_page()

        self._line(pdf, TITLE, 20, align="C", gap=6)

        self._line(pdf, "Product Information", 16)
        self._line(pdf, f"Name: {product.name}", 12)
        self._line(pdf, f"Description: {product.description}", 12)
        if price is not None:
            self._line(pdf, f"Price: ${price:.2f}", 12)

        self._line(pdf, "Technical Details", 16)
        if product.technical_details:
            for key, value in product.technical_details.items():
                self._line(pdf, f"{key}: {value}", 12)
        else:
            self._line(pdf, NO_DETAILS, 12)

        pdf.ln(10)
        self._line(pdf, f"Generated on: {self._clock():%Y-%m-%d}", 10, align="C")

        return bytes(pdf.output())
