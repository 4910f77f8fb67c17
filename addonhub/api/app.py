"""FastAPI application factory for AddonHub."""

from __future__ import annotations

import json
import logging
import time
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response

from addonhub.api.auth import ActorResolver
from addonhub.api.routes.addons import router as addons_router
from addonhub.api.routes.reviews import router as reviews_router
from addonhub.service import AddonHub

logger = logging.getLogger(__name__)


def _resolve_log_level(name: str) -> int:
    level = getattr(logging, name.strip().upper(), logging.INFO)
    return int(level)


def _log_json(level: int, event: str, **fields: object) -> None:
    if not logger.isEnabledFor(level):
        return
    payload = {"event": event, **fields}
    logger.log(level, "%s", json.dumps(payload, ensure_ascii=False, sort_keys=True))


def create_app(hub: AddonHub, actor_resolver: ActorResolver) -> FastAPI:
    """Create the AddonHub API around a configured hub."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await hub.close()

    app = FastAPI(
        title="AddonHub API",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.hub = hub
    app.state.actor_resolver = actor_resolver
    app.state.log_level = _resolve_log_level(hub.config.log_level)

    @app.middleware("http")
    async def request_log_middleware(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        started = time.perf_counter()
        method = request.method
        path = request.url.path
        try:
            response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled API exception: %s",
                json.dumps({"event": "api_request_error", "method": method, "path": path}, ensure_ascii=False),
            )
            raise
        _log_json(
            app.state.log_level,
            "api_request",
            method=method,
            path=path,
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000.0, 3),
        )
        return response

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    app.include_router(addons_router)
    app.include_router(reviews_router)

    return app
