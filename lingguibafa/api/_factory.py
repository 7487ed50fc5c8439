"""Application factory primitives for the Linggui Bafa API."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping, Sequence

from fastapi import FastAPI
from fastapi.routing import APIRouter
from starlette.responses import Response

MiddlewareInstaller = Callable[[FastAPI], None]
OnCreateHook = Callable[[FastAPI], None]


@dataclass(frozen=True)
class RouterSpec:
    """How an :class:`APIRouter` is mounted on the application."""

    router: APIRouter
    prefix: str | None = None
    tags: Sequence[str] | None = None

    def install(self, app: FastAPI) -> None:
        kwargs: MutableMapping[str, Any] = {}
        if self.prefix:
            kwargs["prefix"] = self.prefix
        if self.tags is not None:
            kwargs["tags"] = list(self.tags)
        app.include_router(self.router, **kwargs)


@dataclass(frozen=True)
class AppFactoryConfig:
    """Everything :func:`build_app` needs to assemble a FastAPI app."""

    title: str
    version: str | None = None
    default_response_class: type[Response] | None = None
    openapi_tags: Sequence[Mapping[str, Any]] | None = None
    middlewares: Sequence[MiddlewareInstaller] = field(default_factory=tuple)
    routers: Sequence[RouterSpec] = field(default_factory=tuple)
    on_create: Sequence[OnCreateHook] = field(default_factory=tuple)


def build_app(config: AppFactoryConfig) -> FastAPI:
    """Instantiate a FastAPI application according to ``config``."""

    kwargs: dict[str, Any] = {"title": config.title}
    if config.version is not None:
        kwargs["version"] = config.version
    if config.default_response_class is not None:
        kwargs["default_response_class"] = config.default_response_class
    if config.openapi_tags:
        kwargs["openapi_tags"] = list(config.openapi_tags)
    app = FastAPI(**kwargs)

    for installer in config.middlewares:
        installer(app)
    for spec in config.routers:
        spec.install(app)
    for callback in config.on_create:
        callback(app)

    return app


__all__ = ["AppFactoryConfig", "RouterSpec", "build_app"]
