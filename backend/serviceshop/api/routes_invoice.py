from typing import Optional

from fastapi import APIRouter, Body, Depends, Request

from serviceshop.config import Settings, get_settings
from serviceshop.services.invoice_service import InvoiceService

router = APIRouter(tags=["invoice"])


@router.post("/cart-pdf", summary="Render the cart as a PDF invoice")
def cart_pdf(
    request: Request,
    payload: Optional[dict] = Body(None),
    settings: Settings = Depends(get_settings),
):
    """
    payload: { "items": [{"title", "price", "qty"}], "subtotal": 123, "timestamp": "..." }
    """
    payload = payload or {}
    svc = InvoiceService(settings)
    result = svc.render_cart(payload.get("items"), payload.get("subtotal"), payload.get("timestamp"))
    pdf_url = f"{str(request.base_url).rstrip('/')}/pdfs/{result['filename']}"
    return {"success": True, "pdfUrl": pdf_url, "orderId": result["orderId"]}
