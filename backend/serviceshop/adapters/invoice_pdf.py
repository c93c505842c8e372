import os
from typing import Dict, List, Optional

from fpdf import FPDF
from fpdf.enums import XPos, YPos
from fpdf.errors import FPDFException


class InvoiceRenderError(Exception):
    pass


def format_inr(amount) -> str:
    """1234567.5 -> "Rs.12,34,567.50" (Indian digit grouping)."""
    amount = float(amount or 0)
    sign = "-" if amount < 0 else ""
    paise = int(round(abs(amount) * 100))
    whole, frac = divmod(paise, 100)

    digits = str(whole)
    if len(digits) > 3:
        head, tail = digits[:-3], digits[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        digits = ",".join(groups + [tail])

    text = f"{digits}.{frac:02d}" if frac else digits
    return f"{sign}Rs.{text}"


def _latin1(text) -> str:
    # core PDF fonts only cover latin-1
    return str(text).encode("latin-1", "replace").decode("latin-1")


class InvoicePdfRenderer:
    """
    Writes a one-page cart invoice to `out_dir/<order_id>.pdf`.
    render() returns the file path; any failure surfaces as InvoiceRenderError.
    """

    def __init__(self, out_dir: str, shop_name: str, address_lines: List[str], phone: str):
        self.out_dir = out_dir
        self.shop_name = shop_name
        self.address_lines = address_lines
        self.phone = phone

    def _centered(self, pdf: FPDF, text: str, size: int, style: str = "", h: float = 6):
        pdf.set_font("Helvetica", style, size)
        pdf.cell(0, h, _latin1(text), align="C", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

    def render(self, order_id: str, lines: List[Dict], subtotal: float, timestamp: Optional[str]) -> str:
        path = os.path.join(self.out_dir, f"{order_id}.pdf")
        try:
            os.makedirs(self.out_dir, exist_ok=True)
            pdf = FPDF(format="A4")
            pdf.set_margins(14, 14, 14)
            pdf.add_page()

            self._centered(pdf, self.shop_name, 22, "B", h=10)
            for line in self.address_lines:
                self._centered(pdf, line, 11)
            self._centered(pdf, f"Phone: {self.phone}", 11)
            pdf.ln(3)
            y = pdf.get_y()
            pdf.line(pdf.l_margin, y, pdf.w - pdf.r_margin, y)
            pdf.ln(5)

            self._centered(pdf, "Order Invoice", 14, h=8)
            pdf.ln(3)

            pdf.set_font("Helvetica", "", 11)
            pdf.cell(0, 6, _latin1(f"Order ID : {order_id}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.cell(0, 6, _latin1(f"Date     : {timestamp}"), new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.ln(4)

            pdf.set_font("Helvetica", "U", 12)
            pdf.cell(0, 7, "Items:", new_x=XPos.LMARGIN, new_y=YPos.NEXT)
            pdf.ln(2)

            pdf.set_font("Helvetica", "", 11)
            for index, item in enumerate(lines, start=1):
                text = (
                    f"{index}. {item['title']}  -  {format_inr(item['price'])} x {item['qty']}"
                    f"  =  {format_inr(item['price'] * item['qty'])}"
                )
                pdf.multi_cell(0, 6, _latin1(text), new_x=XPos.LMARGIN, new_y=YPos.NEXT)

            pdf.ln(4)
            pdf.set_font("Helvetica", "", 13)
            pdf.cell(0, 8, _latin1(f"Subtotal: {format_inr(subtotal)}"), align="R", new_x=XPos.LMARGIN, new_y=YPos.NEXT)

            pdf.ln(12)
            self._centered(pdf, f"Thank you for shopping with {self.shop_name}.", 10)
            self._centered(pdf, f"For any support, please contact: {self.phone}", 10)

            pdf.output(path)
        except (FPDFException, OSError) as e:
            raise InvoiceRenderError(str(e)) from e
        return path
