# Path: api/proxy.py
# Purpose: Forward browser requests to the inference provider with a server-side credential.
# Layer: api.
# Details: Only chat-completions and per-model routes are forwarded; everything else is rejected.

from __future__ import annotations

import logging
from typing import Dict, Optional
from urllib.parse import unquote

import httpx
from fastapi import Request, Response
from fastapi.responses import JSONResponse

from config.settings import ServerSettings

logger = logging.getLogger(__name__)

ROUTE_PREFIX = "/api/hf"
CHAT_ROUTE = "chat/completions"
MODELS_ROUTE = "models/"
FORWARDED_HEADERS = ("content-type", "accept")
BODYLESS_METHODS = {"GET", "HEAD"}

PREFLIGHT_HEADERS: Dict[str, str] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET,POST,PUT,PATCH,DELETE,OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}


def _has_dot_segments(route: str) -> bool:
    """True when any path segment, after percent-decoding, is ``.`` or ``..``."""

    decoded = route
    while True:
        unquoted = unquote(decoded)
        if unquoted == decoded:
            break
        decoded = unquoted
    return any(segment in (".", "..") for segment in decoded.replace("\\", "/").split("/"))


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers={"Access-Control-Allow-Origin": "*"})


class ForwardingProxy:
    """Relay requests under ``/api/hf/`` to the provider, injecting the bearer token."""

    def __init__(self, settings: ServerSettings, http_client: httpx.AsyncClient) -> None:
        self.settings = settings
        self.http_client = http_client

    def resolve_target(self, route: str, query: str = "") -> Optional[str]:
        """Map a proxy route (the part after ``/api/hf/``) to the provider URL, or None if unknown."""

        if _has_dot_segments(route):
            return None

        upstream = self.settings.upstream_url.rstrip("/")
        suffix = f"?{query}" if query else ""
        if route.startswith(CHAT_ROUTE):
            return f"{upstream}/v1/chat/completions{suffix}"
        if route.startswith(MODELS_ROUTE):
            return f"{upstream}/models/{route[len(MODELS_ROUTE):]}{suffix}"
        return None

    async def handle(self, request: Request, route: str) -> Response:
        """
        Answer preflights, validate configuration and route, then forward.

        External calls:
        - httpx.AsyncClient.request - the upstream provider call.
        """

        if request.method == "OPTIONS":
            return Response(status_code=204, headers=PREFLIGHT_HEADERS)

        if not self.settings.token:
            return _error(500, "Missing HF_TOKEN on server")

        target = self.resolve_target(route, request.url.query)
        if target is None:
            return _error(404, "Unknown HF proxy route")

        headers = {"Authorization": f"Bearer {self.settings.token}"}
        for name in FORWARDED_HEADERS:
            if name in request.headers:
                headers[name.title()] = request.headers[name]

        method = request.method.upper()
        body = None if method in BODYLESS_METHODS else await request.body()

        try:
            upstream = await self.http_client.request(method, target, headers=headers, content=body)
        except httpx.HTTPError as exc:
            logger.error("Upstream request for %s failed: %s", route, exc)
            return _error(502, "Upstream request failed")

        logger.info("%s %s/%s -> %s", method, ROUTE_PREFIX, route, upstream.status_code)
        response_headers = {"Access-Control-Allow-Origin": "*"}
        content_type = upstream.headers.get("content-type")
        if content_type:
            response_headers["Content-Type"] = content_type
        return Response(content=upstream.content, status_code=upstream.status_code, headers=response_headers)
