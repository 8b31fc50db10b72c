"""FastAPI application factory and error -> HTTP status mapping."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from catalog.errors import ConflictError, NotFound, StorageError, ValidationError
from catalog.service import CatalogService
from config import CatalogConfig, WebConfig
from web.routers.categories import router as categories_router
from web.routers.health import router as health_router
from web.routers.videos import router as videos_router

logger = logging.getLogger(__name__)

_INTERNAL_ERROR = {"error": "Internal Server Error"}


async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse({"error": str(exc), "field": exc.field}, status_code=400)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    loc = errors[0].get("loc", ()) if errors else ()
    field = str(loc[-1]) if loc else None
    message = errors[0].get("msg", "invalid request") if errors else "invalid request"
    return JSONResponse({"error": f"{field}: {message}" if field else message, "field": field},
                        status_code=400)


async def conflict_handler(request: Request, exc: ConflictError):
    return JSONResponse({"error": str(exc)}, status_code=400)


async def not_found_handler(request: Request, exc: NotFound):
    return JSONResponse({"error": str(exc)}, status_code=404)


async def storage_error_handler(request: Request, exc: StorageError):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc,
                 exc_info=exc)
    return JSONResponse(_INTERNAL_ERROR, status_code=500)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(_INTERNAL_ERROR, status_code=500)


def create_app(store, web_config: WebConfig | None = None,
               catalog_config: CatalogConfig | None = None) -> FastAPI:
    """Build a FastAPI app wired to ``store``."""
    web_config = web_config or WebConfig()
    catalog_config = catalog_config or CatalogConfig()

    app = FastAPI(title="Video Catalog")

    state = app.state
    state.video_store = store
    state.catalog = CatalogService(store, default_page_size=catalog_config.default_page_size)
    state.web_config = web_config

    app.add_exception_handler(ValidationError, validation_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ConflictError, conflict_handler)
    app.add_exception_handler(NotFound, not_found_handler)
    app.add_exception_handler(StorageError, storage_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    prefix = web_config.api_prefix
    app.include_router(videos_router, prefix=prefix)
    app.include_router(categories_router, prefix=prefix)
    app.include_router(health_router, prefix=prefix)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=web_config.cors_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    return app
