"""FastAPI application for the timer registry."""
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from ..config import Settings, settings as default_settings
from ..controller import TimerController
from ..errors import TimerError
from ..store import StorageGateway, connect_gateway
from .routes import router

logger = logger.bind(module="api")


async def timer_error_handler(request: Request, exc: TimerError) -> JSONResponse:
    """Render a TimerError as ``{"detail": message}`` with its status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


def create_app(
    settings: Settings | None = None,
    gateway: StorageGateway | None = None,
) -> FastAPI:
    """Build the application.

    Args:
        settings: Service settings, defaults to the environment-loaded ones
        gateway: Pre-built storage gateway; when omitted one is opened from
            ``settings`` at startup and closed at shutdown

    Returns:
        FastAPI app
    """
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        owned = None
        if getattr(app.state, "controller", None) is None:
            # Connection failure propagates and aborts startup
            owned = connect_gateway(settings)
            app.state.controller = TimerController(owned, settings.store_timeout)
            logger.info(f"Storage backend ready: {settings.store_backend}")
        yield
        if owned is not None:
            owned.close()
            app.state.controller = None
            logger.info("Storage backend closed")

    app = FastAPI(
        title="Timer Registry",
        description="Registry of timer descriptions backed by a document store",
        version="0.1.0",
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.controller = (
        TimerController(gateway, settings.store_timeout) if gateway is not None else None
    )

    app.add_exception_handler(TimerError, timer_error_handler)
    app.include_router(router)
    return app
