from datetime import datetime
from typing import Any, Dict, Optional

from serviceshop.adapters.invoice_pdf import InvoicePdfRenderer, InvoiceRenderError
from serviceshop.config import Settings, settings as default_settings
from serviceshop.errors import StoreError, ValidationError
from serviceshop.utils import identifiers
from serviceshop.utils.fields import to_number
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.invoice", "INVOICE")


class InvoiceService:
    def __init__(self, settings: Settings = default_settings, renderer: Optional[InvoicePdfRenderer] = None):
        self.settings = settings
        self.renderer = renderer or InvoicePdfRenderer(
            out_dir=settings.PDF_DIR,
            shop_name=settings.SHOP_NAME,
            address_lines=settings.SHOP_ADDRESS_LINES,
            phone=settings.SHOP_PHONE,
        )

    def render_cart(self, items: Any, subtotal: Any, timestamp: Optional[str] = None) -> Dict:
        """
        items: list of {title, price, qty}
        Returns {"orderId", "filename"}; the caller turns the filename into a URL.
        """
        if not isinstance(items, list) or not items:
            raise ValidationError("Cart is empty.")

        lines = []
        for i, item in enumerate(items):
            if not isinstance(item, dict):
                raise ValidationError("Invalid cart item.", {f"items[{i}]": "must be an object"})
            lines.append(
                {
                    "title": item.get("title") or "",
                    "price": to_number(item.get("price", 0), f"items[{i}].price"),
                    "qty": to_number(item.get("qty", 1), f"items[{i}].qty"),
                }
            )
        for line in lines:
            if line["qty"].is_integer():
                line["qty"] = int(line["qty"])

        total = to_number(subtotal, "subtotal") if subtotal not in (None, "") else 0.0
        order_id = identifiers.generate(identifiers.ORDER_PREFIX)
        when = timestamp or datetime.now().strftime("%d/%m/%Y, %H:%M:%S")

        try:
            path = self.renderer.render(order_id, lines, total, when)
        except InvoiceRenderError as e:
            log.exception("PDF error for %s: %s", order_id, e)
            raise StoreError("Failed to generate PDF.")
        log.info("invoice %s written to %s", order_id, path)
        return {"orderId": order_id, "filename": f"{order_id}.pdf"}
