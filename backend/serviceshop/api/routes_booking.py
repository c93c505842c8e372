from typing import Optional

from fastapi import APIRouter, Body, Depends, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from serviceshop.config import Settings, get_settings
from serviceshop.db import get_db
from serviceshop.errors import StoreError
from serviceshop.schemas.booking_schema import booking_to_dict
from serviceshop.services.booking_service import BookingService
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.api.booking", "API")

router = APIRouter(tags=["booking"])


@router.post("/book", summary="Book a repair")
def book(
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """
    payload: { "device_type", "date_slot", "description", "contact_phone" }
    returns the ticket id to track the booking with
    """
    payload = payload or {}
    svc = BookingService(db, settings)
    try:
        booking = svc.book(
            payload.get("device_type"),
            payload.get("date_slot"),
            payload.get("description"),
            payload.get("contact_phone"),
        )
    except SQLAlchemyError:
        log.exception("Book error")
        raise StoreError("Server error while booking")
    return {
        "success": True,
        "message": f"Booking created with Ticket ID: {booking.id}",
        "bookingId": booking.id,
    }


@router.get("/track", summary="Track a booking by ticket id or phone")
def track(
    phone: Optional[str] = Query(None, description="ticket id or phone number"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    svc = BookingService(db, settings)
    try:
        booking = svc.track(phone)
        if not booking:
            return {"success": False, "message": "No booking found"}
        return {"success": True, "booking": booking_to_dict(booking)}
    except SQLAlchemyError:
        log.exception("Track error")
        raise StoreError("Server error while tracking")
