from fastapi import APIRouter, Depends
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from serviceshop.db import get_db
from serviceshop.errors import NotFound, StoreError
from serviceshop.repositories.setting_repo import SettingRepository
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.api.settings", "API")

router = APIRouter(tags=["settings"])


@router.get("/settings/{key}", summary="Read a site text setting")
def get_setting(key: str, db: Session = Depends(get_db)):
    try:
        s = SettingRepository(db).get(key.strip())
    except SQLAlchemyError:
        log.exception("Setting read error for %s", key)
        raise StoreError()
    if not s:
        raise NotFound("Setting not found")
    return {"success": True, "key": s.key, "text": s.text}
