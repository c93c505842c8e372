import os
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from serviceshop.api.health import router as health_router
from serviceshop.api.routes_admin import router as admin_router
from serviceshop.api.routes_booking import router as booking_router
from serviceshop.api.routes_catalogue import router as catalogue_router
from serviceshop.api.routes_intake import router as intake_router
from serviceshop.api.routes_invoice import router as invoice_router
from serviceshop.api.routes_settings import router as settings_router
from serviceshop.config import settings
from serviceshop.db import init_db
from serviceshop.errors import ShopException
from serviceshop.utils.log import get_logger

log = get_logger("serviceshop.http", "HTTP")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; RESET_DB=1 drops and recreates every table
    init_db(reset=settings.RESET_DB)
    if not settings.ADMIN_KEY:
        log.warning("ADMIN_KEY is not set; admin routes will reject every request")
    log.info("%s backend ready", settings.SHOP_NAME)
    yield


app = FastAPI(title=f"{settings.SHOP_NAME} - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - start) * 1000
    log.info("%s %s %s %.1f ms", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(ShopException)
async def shop_exception_handler(request: Request, exc: ShopException):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = {".".join(str(p) for p in e["loc"]): e["msg"] for e in exc.errors()}
    return JSONResponse(
        status_code=400,
        content={"success": False, "message": "Invalid request", "errors": errors},
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"success": False, "message": "Server error"})


app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])

app.include_router(booking_router, prefix="/api", tags=["booking"])

app.include_router(intake_router, prefix="/api", tags=["intake"])

app.include_router(invoice_router, prefix="/api", tags=["invoice"])

app.include_router(settings_router, prefix="/api", tags=["settings"])

app.include_router(admin_router, prefix="/api", tags=["admin"])

# generated invoices
os.makedirs(settings.PDF_DIR, exist_ok=True)
app.mount("/pdfs", StaticFiles(directory=settings.PDF_DIR), name="pdfs")
