"""
Main entrypoint for the Travel Map Records API.

This module assembles the FastAPI application, sets up logging, the
request counter and error handlers, and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn travel_map_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import settings
from .core.exceptions import RecordsError
from .core.logging_config import setup_logging
from .core.middleware import BodySizeLimitMiddleware, PayloadTooLargeError
from .core.store import init_store
from .services.statistics_service import StatisticsService

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the store and
    # services can safely log during startup.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def count_requests(request: Request, call_next):
        # Counted before dispatch so that rejected and unknown requests
        # show up in the statistics too.
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        try:
            await StatisticsService.increment(request.method, path)
        except RecordsError as exc:
            logger.error("Request counter not updated: %s", exc)
            return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
        return await call_next(request)

    # Added last so it runs first: bodies declaring an oversized length
    # are refused before they are counted or parsed.
    app.add_middleware(BodySizeLimitMiddleware)

    @app.exception_handler(RecordsError)
    async def records_error_handler(request: Request, exc: RecordsError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("%s %s failed: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(PayloadTooLargeError)
    async def payload_too_large_handler(request: Request, exc: PayloadTooLargeError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("Rejected body for %s %s: %s", request.method, request.url.path, exc.errors())
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"message": "Invalid payload"})

    app.include_router(api_router, prefix="/api")

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the data directory and any missing collection files.
        init_store()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
