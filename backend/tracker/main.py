from __future__ import annotations

import logging

import uvicorn
from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from tracker.core.config import settings
from tracker.core.errors import ErrorCodes, MonitorError, error_body
from tracker.core.logger import setup_logging

# Routers
from tracker.routers import index as index_router
from tracker.routers import monitor as monitor_router

logger = logging.getLogger(__name__)


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MonitorError)
    async def _monitor_error_handler(request: Request, exc: MonitorError):
        if exc.status_code >= 500:
            logger.error(
                "%s %s -> %d %s", request.method, request.url.path, exc.status_code, exc.code
            )
        else:
            logger.warning(
                "%s %s -> %d %s: %s",
                request.method,
                request.url.path,
                exc.status_code,
                exc.code,
                exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code, content=error_body(exc.code, exc.message)
        )

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(
            "Unhandled exception | %s %s",
            request.method,
            request.url.path,
            exc_info=(type(exc), exc, exc.__traceback__),
        )
        return JSONResponse(
            status_code=500,
            content=error_body(ErrorCodes.INTERNAL_ERROR, "Internal Server Error"),
        )


def create_app() -> FastAPI:
    setup_logging(settings, console_label="web", tags=settings.LOGGLY_TAGS)

    app = FastAPI(title=settings.APP_NAME)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    _register_exception_handlers(app)

    # ----- Static files -----
    # Mounted before the index router so "/static" never hits "/{server}".
    app.mount(
        settings.STATIC_URL,
        StaticFiles(directory=str(settings.STATIC_ROOT), html=False),
        name="static",
    )

    # ----- API v1 router -----
    api = APIRouter(prefix=settings.API_PREFIX)
    api.include_router(monitor_router.router)
    app.include_router(api)

    app.include_router(index_router.router)

    logger.info("%s started (env=%s)", settings.APP_NAME, settings.ENV)
    return app


app = create_app()


def run() -> None:
    """Serve the app with uvicorn (`tracker-monitor` console script)."""
    uvicorn.run("tracker.main:app", host=settings.HOST, port=settings.PORT)
