"""FastAPI application factory for the Linggui Bafa service."""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse

from .. import __version__
from ._factory import AppFactoryConfig, RouterSpec, build_app
from .errors import install_error_handlers

_APP_INSTANCE: FastAPI | None = None


def _install_gzip(app: FastAPI) -> None:
    app.add_middleware(GZipMiddleware, minimum_size=512)


def create_app() -> FastAPI:
    from .routers import health as health_router
    from .routers import linggui as linggui_router

    config = AppFactoryConfig(
        title="Linggui Bafa API",
        version=__version__,
        default_response_class=ORJSONResponse,
        openapi_tags=(
            {"name": "system", "description": "Service level operations."},
            {"name": "linggui", "description": "Open-point and meridian clock lookups."},
        ),
        middlewares=(_install_gzip,),
        routers=(
            RouterSpec(health_router.router, tags=("system",)),
            RouterSpec(linggui_router.router, prefix="/v1/linggui", tags=("linggui",)),
        ),
        on_create=(install_error_handlers,),
    )
    return build_app(config)


def get_app() -> FastAPI:
    global _APP_INSTANCE
    if _APP_INSTANCE is None:
        _APP_INSTANCE = create_app()
    return _APP_INSTANCE


__all__ = ["create_app", "get_app"]
