from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from serviceshop.config import Settings, get_settings
from serviceshop.db import get_db
from serviceshop.errors import StoreError
from serviceshop.schemas.product_schema import product_to_dict
from serviceshop.services.catalog_service import CatalogService
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.api.catalogue", "API")

router = APIRouter(tags=["catalogue"])


@router.get("", summary="List visible products")
def list_products(db: Session = Depends(get_db), settings: Settings = Depends(get_settings)):
    svc = CatalogService(db, settings)
    try:
        items = svc.list_public()
        return {"success": True, "items": [product_to_dict(p) for p in items]}
    except SQLAlchemyError:
        log.exception("Products error")
        raise StoreError("Server error while loading products")
