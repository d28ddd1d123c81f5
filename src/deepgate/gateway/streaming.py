"""Chunk pipe between an upstream body and a downstream writer.

Chunks are written as soon as they are read; nothing is buffered or parsed,
so JSON bodies and SSE streams take the same path.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterable, Awaitable, Callable
from dataclasses import dataclass

import aiohttp

logger = logging.getLogger(__name__)


@dataclass
class PipeResult:
    """How a pipe run ended."""

    bytes_written: int = 0
    completed: bool = False
    client_disconnected: bool = False
    upstream_failed: bool = False
    error: str | None = None


async def pipe(
    source: AsyncIterable[bytes],
    write: Callable[[bytes], Awaitable[None]],
) -> PipeResult:
    """Copy every chunk from `source` to `write` until either side stops.

    A downstream write failure (client went away) and a broken upstream read
    both end the pipe early and are reported in the result, not raised. The
    caller owns both ends and is responsible for closing them.
    """
    result = PipeResult()
    try:
        async for chunk in source:
            try:
                await write(chunk)
            except ConnectionResetError as e:
                result.client_disconnected = True
                result.error = f"client disconnected: {e}"
                return result
            result.bytes_written += len(chunk)
    except (aiohttp.ClientError, TimeoutError) as e:
        result.upstream_failed = True
        result.error = f"upstream stream failed: {e!r}"
        return result

    result.completed = True
    return result
