"""FastAPI application entry point."""

import logging
import structlog
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.settings.catalog import router as catalog_router
from src.api.settings.lookups import router as lookups_router
from src.api.settings.pricing import router as pricing_router
from src.api.settings.system import router as system_router
from src.config import settings
from src.database import dispose_engine
from src.errors import SettingsError, translate
from src.redis_client import close_redis

structlog.configure(
    processors=[
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.add_log_level,
        structlog.dev.ConsoleRenderer() if settings.environment == "development"
        else structlog.processors.JSONRenderer(),
    ],
    wrapper_class=structlog.make_filtering_bound_logger(
        getattr(logging, settings.log_level.upper(), logging.INFO)
    ),
)

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application startup and shutdown."""
    logger.info("app_starting", environment=settings.environment)
    yield
    await close_redis()
    await dispose_engine()
    logger.info("app_shutting_down")


app = FastAPI(
    title=settings.app_name,
    description="Back-office settings for a materials testing laboratory",
    version="0.1.0",
    lifespan=lifespan,
)

app.include_router(catalog_router)
app.include_router(pricing_router)
app.include_router(lookups_router)
app.include_router(system_router)


def _error_body(status_code: int, message: str, message_ar: str) -> dict:
    return {"statusCode": status_code, "message": message, "messageAr": message_ar}


@app.exception_handler(SettingsError)
async def settings_error_handler(request: Request, exc: SettingsError) -> JSONResponse:
    logger.warning(
        "settings_request_rejected",
        path=request.url.path,
        method=request.method,
        status_code=exc.status_code,
        error=exc.message,
    )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.status_code, message, translate(message)),
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.warning(
        "settings_request_rejected",
        path=request.url.path,
        method=request.method,
        status_code=400,
        error="validation",
    )
    body = _error_body(400, "Bad Request", translate("Bad Request"))
    body["errors"] = jsonable_encoder(exc.errors())
    return JSONResponse(status_code=400, content=body)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": settings.app_name,
        "version": "0.1.0",
        "status": "running",
    }
