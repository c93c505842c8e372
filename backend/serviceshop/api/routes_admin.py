from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from serviceshop.api.deps import require_admin_key
from serviceshop.config import Settings, get_settings
from serviceshop.db import get_db
from serviceshop.errors import StoreError
from serviceshop.repositories.setting_repo import SettingRepository
from serviceshop.schemas.booking_schema import booking_to_dict
from serviceshop.schemas.intake_schema import (
    C2CRequestOut,
    ContactMessageOut,
    CscBookingOut,
    SettingOut,
    to_dict,
)
from serviceshop.schemas.product_schema import product_to_dict
from serviceshop.services.booking_service import BookingService
from serviceshop.services.catalog_service import CatalogService
from serviceshop.services.intake_service import IntakeService
from serviceshop.utils.log import get_logger
from serviceshop.utils.transactions import write_transaction

log = get_logger("serviceshop.api.admin", "ADMIN")

router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin_key)])


@router.get("/summary", summary="Record counts for the dashboard")
def summary(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    intake = IntakeService(db, settings)
    try:
        data = {
            "bookingCount": BookingService(db, settings).repo.count(),
            "c2cCount": intake.c2c.count(),
            "cscCount": intake.csc.count(),
            "contactCount": intake.contacts.count(),
            "productCount": CatalogService(db, settings).repo.count(),
        }
    except SQLAlchemyError:
        log.exception("Admin summary error")
        raise StoreError()
    return {"success": True, "data": data}


# -- bookings ------------------------------------------------------------------


@router.get("/bookings", summary="Most recent repair bookings")
def list_bookings(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        bookings = BookingService(db, settings).list_recent()
    except SQLAlchemyError:
        log.exception("Admin bookings error")
        raise StoreError()
    return {"success": True, "bookings": [booking_to_dict(b) for b in bookings]}


@router.patch("/bookings/{booking_id}", summary="Update booking status / estimate / final amount")
def update_booking(
    booking_id: str,
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    svc = BookingService(db, settings)
    try:
        booking = svc.update(booking_id, payload or {})
    except SQLAlchemyError:
        log.exception("Admin update booking error")
        raise StoreError()
    return {"success": True, "booking": booking_to_dict(booking)}


# -- write-once submissions ------------------------------------------------------


@router.get("/c2c", summary="Card-to-cash requests")
def list_c2c(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        items = IntakeService(db, settings).recent_c2c()
    except SQLAlchemyError:
        log.exception("Admin c2c error")
        raise StoreError()
    return {"success": True, "items": [to_dict(C2CRequestOut, r) for r in items]}


@router.get("/csc", summary="Community service center bookings")
def list_csc(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        items = IntakeService(db, settings).recent_csc()
    except SQLAlchemyError:
        log.exception("Admin csc error")
        raise StoreError()
    return {"success": True, "items": [to_dict(CscBookingOut, r) for r in items]}


@router.get("/contacts", summary="Contact messages")
def list_contacts(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        items = IntakeService(db, settings).recent_contacts()
    except SQLAlchemyError:
        log.exception("Admin contacts error")
        raise StoreError()
    return {"success": True, "items": [to_dict(ContactMessageOut, r) for r in items]}


# -- products ----------------------------------------------------------------------


@router.get("/products", summary="All products, hidden ones included")
def list_products(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    try:
        items = CatalogService(db, settings).list_admin()
    except SQLAlchemyError:
        log.exception("Admin products error")
        raise StoreError()
    return {"success": True, "items": [product_to_dict(p) for p in items]}


@router.post("/products", summary="Create a product")
def create_product(
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    svc = CatalogService(db, settings)
    try:
        product = svc.create(payload or {})
    except SQLAlchemyError:
        log.exception("Product create error")
        raise StoreError("Server error while saving product.")
    return {"success": True, "product": product_to_dict(product)}


@router.patch("/products/{product_id}", summary="Update product fields")
def update_product(
    product_id: str,
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    svc = CatalogService(db, settings)
    try:
        product = svc.update(product_id, payload or {})
    except SQLAlchemyError:
        log.exception("Product update error")
        raise StoreError("Server error while updating product.")
    return {"success": True, "item": product_to_dict(product)}


# -- site settings -------------------------------------------------------------------


@router.put("/settings/{key}", summary="Create or replace a site text setting")
def put_setting(key: str, payload: Optional[dict] = Body(None), db: Session = Depends(get_db)):
    text = str((payload or {}).get("text") or "").strip()
    repo = SettingRepository(db)
    try:
        with write_transaction(db):
            s = repo.upsert(key.strip(), text)
    except SQLAlchemyError:
        log.exception("Setting update error")
        raise StoreError()
    return {"success": True, "setting": to_dict(SettingOut, s)}
