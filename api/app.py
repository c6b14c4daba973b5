# Path: api/app.py
# Purpose: Expose a FastAPI application hosting the inference forwarding proxy.
# Layer: api.
# Details: Provides a health check and the /api/hf/ proxy routes delegating to ForwardingProxy.

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Optional

import httpx
from fastapi import FastAPI, Request, Response

from config.settings import ServerSettings

from .proxy import ROUTE_PREFIX, ForwardingProxy

PROXY_METHODS = ["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]
UPSTREAM_TIMEOUT = 300.0


def create_app(settings: Optional[ServerSettings] = None, http_client: Optional[httpx.AsyncClient] = None) -> FastAPI:
    """Create a FastAPI app forwarding provider calls; ``http_client`` is owned by the caller when given."""

    settings = settings or ServerSettings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if http_client is not None:
            yield
            return
        async with httpx.AsyncClient(timeout=UPSTREAM_TIMEOUT) as client:
            app.state.proxy = ForwardingProxy(settings, client)
            yield

    app = FastAPI(title="PaletteAI API", version="0.1.0", lifespan=lifespan)
    if http_client is not None:
        app.state.proxy = ForwardingProxy(settings, http_client)

    @app.get("/health")
    def health() -> Dict[str, str]:
        """Return a simple health status payload."""

        return {"status": "ok"}

    @app.api_route(ROUTE_PREFIX + "/{route:path}", methods=PROXY_METHODS)
    async def hf_proxy(route: str, request: Request) -> Response:
        """Forward a provider call through the configured proxy."""

        proxy: ForwardingProxy = request.app.state.proxy
        return await proxy.handle(request, route)

    return app
