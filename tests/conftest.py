"""Pytest configuration and fixtures."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import Any

import pytest
from aiohttp import web

from deepgate.gateway.server import GatewayConfig, GatewayServer

CHAT_COMPLETION = {
    "id": "chatcmpl-123",
    "object": "chat.completion",
    "model": "DeepSeek-V3",
    "choices": [
        {
            "index": 0,
            "message": {"role": "assistant", "content": "Hello!"},
            "finish_reason": "stop",
        }
    ],
}


@dataclass
class FakeUpstream:
    """Local stand-in for the chat upstream.

    Records every request it receives. Replace `respond` to change behaviour.
    """

    url: str = ""
    bodies: list[Any] = field(default_factory=list)
    headers: list[dict[str, str]] = field(default_factory=list)
    respond: Callable[[web.Request], Awaitable[web.StreamResponse]] | None = None

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.headers.append(dict(request.headers))
        self.bodies.append(await request.json())
        if self.respond is not None:
            return await self.respond(request)
        return web.json_response(CHAT_COMPLETION)


@pytest.fixture
def chat_body():
    """Minimal valid chat-completion request."""
    return {"model": "deepseek-chat", "messages": [{"role": "user", "content": "hi"}]}


@pytest.fixture
async def fake_upstream():
    """Run a FakeUpstream on a free port."""
    upstream = FakeUpstream()

    app = web.Application()
    app.router.add_post("/api/ai", upstream.handle)
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()

    port = runner.addresses[0][1]
    upstream.url = f"http://127.0.0.1:{port}/api/ai"

    yield upstream

    await runner.cleanup()


@pytest.fixture
async def start_gateway(fake_upstream):
    """Factory fixture: start a gateway pointed at fake_upstream, return its base URL."""
    servers: list[GatewayServer] = []

    async def _start(model_policy: str = "passthrough", upstream_url: str | None = None) -> str:
        server = GatewayServer(
            config=GatewayConfig(
                host="127.0.0.1",
                port=0,  # Let OS pick a port
                model_policy=model_policy,  # type: ignore[arg-type]
                upstream_url=upstream_url or fake_upstream.url,
            )
        )
        servers.append(server)
        return await server.start()

    yield _start

    for server in servers:
        await server.shutdown()
