"""Chat-completion forwarder.

Handles `POST /v1/chat/completions`:
1. Parses the OpenAI-style body
2. Resolves the model name through the configured policy
3. Sends one request to the upstream (no retry)
4. Relays the upstream status, content type and body bytes as they arrive

Only two synthetic responses exist: 400 when the mapping policy does not know
the model, and an opaque 500 when anything in steps 1-3 raises.
"""

from __future__ import annotations

import logging
import time
from contextlib import AsyncExitStack
from dataclasses import dataclass, field

import aiohttp
from aiohttp import web

from deepgate.gateway.catalog import ModelPolicy, PassthroughPolicy
from deepgate.gateway.errors import INTERNAL_ERROR_MESSAGE, ModelNotFoundError, error_body
from deepgate.gateway.streaming import PipeResult, pipe
from deepgate.gateway.tracing import RequestTracer
from deepgate.gateway.transforms.upstream import (
    DEFAULT_CONTENT_TYPE,
    UPSTREAM_HEADERS,
    UPSTREAM_URL,
    to_upstream,
)
from deepgate.gateway.transforms.validation import parse_chat_request

logger = logging.getLogger(__name__)


@dataclass
class Forwarder:
    """Forwards chat completions to the upstream with a pluggable model policy.

    Example:
        >>> forwarder = Forwarder(session=session, policy=MappingPolicy())
        >>> app.router.add_post("/v1/chat/completions", forwarder.handle)
    """

    session: aiohttp.ClientSession
    policy: ModelPolicy = field(default_factory=PassthroughPolicy)
    upstream_url: str = UPSTREAM_URL
    tracer: RequestTracer = field(default_factory=RequestTracer)

    async def handle(self, request: web.Request) -> web.StreamResponse:
        """Handle POST /v1/chat/completions."""
        started = time.monotonic()
        trace_id = self.tracer.generate_trace_id()

        # The exit stack owns the upstream response so it is released however
        # the relay ends, including cancellation when the client goes away.
        async with AsyncExitStack() as stack:
            try:
                chat = parse_chat_request(await request.read())

                try:
                    upstream_model = self.policy.resolve(chat.model)
                except ModelNotFoundError as e:
                    logger.info("[%s] Rejected unknown model %r", trace_id, e.model)
                    return web.json_response(error_body(str(e)), status=400)

                body = to_upstream(chat, upstream_model)
                messages = chat.messages if isinstance(chat.messages, list) else []
                self.tracer.log_request(
                    trace_id, chat.model, upstream_model, len(messages), chat.stream
                )

                upstream = await stack.enter_async_context(
                    self.session.post(self.upstream_url, json=body, headers=UPSTREAM_HEADERS)
                )
            except Exception:
                logger.exception("[%s] Error processing chat completion", trace_id)
                return web.json_response(error_body(INTERNAL_ERROR_MESSAGE), status=500)

            return await self._relay(request, upstream, trace_id, started)

    async def _relay(
        self,
        request: web.Request,
        upstream: aiohttp.ClientResponse,
        trace_id: str,
        started: float,
    ) -> web.StreamResponse:
        """Pipe the upstream response to the caller without buffering it."""
        content_type = upstream.headers.get("Content-Type") or DEFAULT_CONTENT_TYPE
        logger.debug(
            "[%s] Upstream responded %d (%s)", trace_id, upstream.status, content_type
        )

        response = web.StreamResponse(
            status=upstream.status,
            headers={"Content-Type": content_type},
        )
        result = PipeResult()
        try:
            await response.prepare(request)
            result = await pipe(upstream.content.iter_any(), response.write)
            if result.upstream_failed:
                # Body already started: drop the connection without the final
                # chunk so the caller sees a truncated body.
                response.force_close()
                if request.transport is not None:
                    request.transport.close()
            elif not result.client_disconnected:
                await response.write_eof()
        except ConnectionResetError:
            logger.debug("[%s] Client disconnected before end of body", trace_id)
            result.client_disconnected = True
            result.completed = False
            result.error = "client disconnected"
        finally:
            if not result.completed:
                upstream.close()
            self.tracer.log_response(
                trace_id,
                upstream.status,
                time.monotonic() - started,
                result.bytes_written,
                error=None if result.completed else (result.error or "relay interrupted"),
            )

        return response
