"""Gateway server lifecycle.

Owns the aiohttp application, the listening site and the shared upstream
client session. Request handling lives in `Router` and `Forwarder`.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

import aiohttp
from aiohttp import web

from deepgate.gateway.catalog import PolicyName, get_policy
from deepgate.gateway.forwarder import Forwarder
from deepgate.gateway.router import Router
from deepgate.gateway.transforms.upstream import UPSTREAM_URL

logger = logging.getLogger(__name__)


@dataclass
class GatewayConfig:
    """Configuration for the gateway server."""

    host: str = "127.0.0.1"
    port: int = 8000

    # "passthrough" forwards model names untouched; "mapping" translates them
    # through the fixed table and rejects unknown ones with a 400.
    model_policy: PolicyName = "passthrough"

    # Fixed upstream; only overridden by tests.
    upstream_url: str = UPSTREAM_URL

    # None means no timeout at all on the upstream call.
    upstream_timeout: float | None = None

    max_body_size: int = 10 * 1024 * 1024  # 10MB

    def __post_init__(self) -> None:
        get_policy(self.model_policy)
        if self.upstream_timeout is not None and self.upstream_timeout <= 0:
            raise ValueError("upstream_timeout must be positive")


@dataclass
class GatewayServer:
    """OpenAI-compatible gateway in front of the chat upstream.

    Example:
        >>> server = GatewayServer(config=GatewayConfig(model_policy="mapping"))
        >>> await server.serve()
    """

    config: GatewayConfig
    _app: web.Application | None = None
    _runner: web.AppRunner | None = None
    _session: aiohttp.ClientSession | None = None
    _base_url: str | None = None
    _shutdown_event: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def base_url(self) -> str | None:
        """Bound address, e.g. http://127.0.0.1:8000; None before start()."""
        return self._base_url

    def build_app(self, session: aiohttp.ClientSession) -> web.Application:
        """Wire Router and Forwarder into an application using `session` upstream."""
        forwarder = Forwarder(
            session=session,
            policy=get_policy(self.config.model_policy),
            upstream_url=self.config.upstream_url,
        )
        return Router(forwarder=forwarder).build_app(max_body_size=self.config.max_body_size)

    async def start(self) -> str:
        """Bind the listening site and return its base URL."""
        self._shutdown_event.clear()
        timeout = aiohttp.ClientTimeout(total=self.config.upstream_timeout)
        self._session = aiohttp.ClientSession(timeout=timeout)

        self._app = self.build_app(self._session)

        # handler_cancellation: a client disconnect cancels the handler, which
        # closes the upstream response it is relaying.
        self._runner = web.AppRunner(self._app, handler_cancellation=True)
        await self._runner.setup()
        site = web.TCPSite(self._runner, self.config.host, self.config.port)
        await site.start()

        host, port = self._runner.addresses[0][:2]
        self._base_url = f"http://{host}:{port}"

        logger.info(
            "Gateway listening on %s (model policy: %s)",
            self._base_url,
            self.config.model_policy,
        )
        logger.info("Forwarding chat completions to: %s", self.config.upstream_url)
        if self.config.upstream_timeout is None:
            logger.debug("No timeout on upstream requests")
        return self._base_url

    async def serve(self) -> None:
        """Start the gateway and block until shutdown is requested."""
        await self.start()
        try:
            await self._shutdown_event.wait()
        finally:
            await self.shutdown()

    async def shutdown(self) -> None:
        """Stop listening and close the upstream session. Safe to call twice."""
        self._shutdown_event.set()
        if self._runner:
            logger.info("Shutting down gateway...")
            await self._runner.cleanup()
            self._runner = None
        if self._session:
            await self._session.close()
            self._session = None
        self._app = None
        self._base_url = None

    def request_shutdown(self) -> None:
        """Signal-handler friendly: wake serve() so it shuts down."""
        self._shutdown_event.set()
