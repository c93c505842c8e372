from typing import Optional

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from serviceshop.config import Settings, get_settings
from serviceshop.db import get_db
from serviceshop.errors import StoreError
from serviceshop.services.intake_service import IntakeService
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.api.intake", "API")

router = APIRouter(tags=["intake"])


@router.post("/c2c", summary="Card-to-cash request")
def create_c2c(
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    payload = payload or {}
    svc = IntakeService(db, settings)
    try:
        rec = svc.create_c2c(
            payload.get("c2c_brand"),
            payload.get("c2c_amount"),
            payload.get("c2c_name"),
            payload.get("c2c_phone"),
        )
    except SQLAlchemyError:
        log.exception("C2C error")
        raise StoreError("Server error while C2C")
    return {"success": True, "refId": rec.id}


@router.post("/csc-booking", summary="Community service center booking")
def create_csc(
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    payload = payload or {}
    svc = IntakeService(db, settings)
    try:
        rec = svc.create_csc(
            payload.get("service"),
            payload.get("date"),
            payload.get("name"),
            payload.get("phone"),
            notes=payload.get("notes"),
        )
    except SQLAlchemyError:
        log.exception("CSC booking error")
        raise StoreError("Server error while CSC")
    return {"success": True, "token": rec.id}


@router.post("/contact", summary="Contact form")
def create_contact(
    payload: Optional[dict] = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    payload = payload or {}
    svc = IntakeService(db, settings)
    try:
        rec = svc.create_contact(
            payload.get("c_name"),
            payload.get("c_email"),
            payload.get("c_subject"),
            payload.get("c_message"),
            phone=payload.get("c_phone"),
        )
    except SQLAlchemyError:
        log.exception("Contact error")
        raise StoreError("Server error while contact")
    return {"success": True, "refId": rec.id}
