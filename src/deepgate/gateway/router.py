"""Inbound request routing.

A single catch-all aiohttp route feeds `Router.dispatch`, which owns the
routing table. This keeps "wrong method on a known path" a 404 (aiohttp's own
router would answer 405) and lets OPTIONS match every path.

CORS headers are added once, from the `on_response_prepare` signal, so plain,
streamed and error responses all carry them.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

from aiohttp import web

from deepgate.gateway.catalog import MODEL_CATALOG, ModelDescriptor, model_list_payload
from deepgate.gateway.errors import NOT_FOUND_MESSAGE
from deepgate.gateway.forwarder import Forwarder

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type, Authorization",
}

MODELS_PATH = "/v1/models"
CHAT_COMPLETIONS_PATH = "/v1/chat/completions"


async def add_cors_headers(request: web.Request, response: web.StreamResponse) -> None:
    """on_response_prepare hook: stamp CORS headers on every response."""
    response.headers.update(CORS_HEADERS)


@dataclass
class Router:
    """Maps (method, path) to a handler; everything unmatched is a 404."""

    forwarder: Forwarder
    catalog: tuple[ModelDescriptor, ...] = MODEL_CATALOG
    _routes: dict[tuple[str, str], Handler] = field(init=False)

    def __post_init__(self) -> None:
        self._routes = {
            ("GET", MODELS_PATH): self.handle_models,
            ("POST", CHAT_COMPLETIONS_PATH): self.forwarder.handle,
        }

    def build_app(self, max_body_size: int = 10 * 1024 * 1024) -> web.Application:
        """Create the aiohttp application serving this routing table."""
        app = web.Application(client_max_size=max_body_size)
        app.router.add_route("*", "/{tail:.*}", self.dispatch)
        app.on_response_prepare.append(add_cors_headers)
        return app

    async def dispatch(self, request: web.Request) -> web.StreamResponse:
        if request.method == "OPTIONS":
            return web.Response(status=204)

        handler = self._routes.get((request.method, request.path))
        if handler is None:
            logger.debug("No route for %s %s", request.method, request.path)
            return web.Response(status=404, text=NOT_FOUND_MESSAGE)

        return await handler(request)

    async def handle_models(self, request: web.Request) -> web.Response:
        """Handle GET /v1/models."""
        return web.json_response(model_list_payload(self.catalog))
