"""Per-request trace ids and request/response log lines for the chat path."""

from __future__ import annotations

import itertools
import logging
import time

logger = logging.getLogger(__name__)


class RequestTracer:
    """Hands out human-readable trace ids and logs request lifecycles.

    Trace ids look like `00042_031333`: a per-process sequence number and the
    wall-clock time the request arrived. They only appear in log lines.
    """

    def __init__(self) -> None:
        # itertools.count is safe to share between handler coroutines.
        self._counter = itertools.count(1)

    def generate_trace_id(self) -> str:
        return f"{next(self._counter):05d}_{time.strftime('%H%M%S')}"

    def log_request(
        self,
        trace_id: str,
        model: str,
        upstream_model: str,
        msg_count: int,
        stream: object,
    ) -> None:
        logger.info(
            "[%s] Request: model=%s -> %s, messages=%d, stream=%s",
            trace_id,
            model,
            upstream_model,
            msg_count,
            stream,
        )

    def log_response(
        self,
        trace_id: str,
        status_code: int,
        duration_s: float,
        response_size: int = 0,
        error: str | None = None,
    ) -> None:
        """Log the end of a relay.

        Args:
            trace_id: Trace ID for this request.
            status_code: Status relayed to the caller.
            duration_s: Time from request arrival to end of relay.
            response_size: Body bytes written to the caller.
            error: Why the relay ended early, if it did.
        """
        if error:
            logger.warning(
                "[%s] Relay aborted: status=%d, size=%d, error=%s (%.2fs)",
                trace_id,
                status_code,
                response_size,
                error[:100],
                duration_s,
            )
        else:
            logger.info(
                "[%s] Relay complete: status=%d, size=%d (%.2fs)",
                trace_id,
                status_code,
                response_size,
                duration_s,
            )
