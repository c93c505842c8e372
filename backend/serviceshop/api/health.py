from fastapi import APIRouter
from sqlalchemy import text

from serviceshop.config import settings
from serviceshop.db import engine

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False

    return {
        "ok": db_ok,
        "message": f"{settings.SHOP_NAME} API running" if db_ok else "Database unavailable",
        "db": db_ok,
    }
