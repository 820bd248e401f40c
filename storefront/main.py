from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import OperationalError

from storefront.database import init_db
from storefront.config import get_settings
from storefront.errors import DomainError, ErrorCode, UnavailableError
from storefront.middleware.security import setup_security_middleware
from storefront.routers import (
    auth_router,
    categories_router,
    products_router,
    events_router,
    orders_router,
    tickets_router,
    cart_router,
    settings_router,
    admin_router
)

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info(f"{settings.site_name} storefront started")
    yield


app = FastAPI(
    title="Storefront",
    description="Clothing storefront and event ticketing",
    version="1.0.0",
    lifespan=lifespan
)

setup_security_middleware(app, allowed_hosts=settings.allowed_hosts)

# Locally stored QR codes; other blob backends serve their own URLs
app.mount("/media", StaticFiles(directory=settings.blob_dir, check_dir=False), name="media")

app.include_router(auth_router)
app.include_router(categories_router)
app.include_router(products_router)
app.include_router(events_router)
app.include_router(orders_router)
app.include_router(tickets_router)
app.include_router(cart_router)
app.include_router(settings_router)
app.include_router(admin_router)


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"code": exc.code.value, "message": exc.message}
    )


@app.exception_handler(OperationalError)
async def database_error_handler(request: Request, exc: OperationalError):
    logger.error(f"{request.method} {request.url.path}: database unavailable: {exc}")
    error = UnavailableError()
    return JSONResponse(
        status_code=error.status_code,
        content={"code": error.code.value, "message": error.message}
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = jsonable_encoder(exc.errors())
    message = errors[0]["msg"] if errors else "Invalid request"
    return JSONResponse(
        status_code=422,
        content={"code": ErrorCode.VALIDATION.value, "message": message, "errors": errors}
    )


@app.get("/health")
async def health():
    return {"status": "ok"}
