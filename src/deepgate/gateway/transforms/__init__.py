"""Inbound request parsing and upstream request construction."""

from deepgate.gateway.transforms.upstream import (
    DEFAULT_CONTENT_TYPE,
    UPSTREAM_HEADERS,
    UPSTREAM_URL,
    to_upstream,
)
from deepgate.gateway.transforms.validation import ChatCompletionRequest, parse_chat_request

__all__ = [
    "DEFAULT_CONTENT_TYPE",
    "UPSTREAM_HEADERS",
    "UPSTREAM_URL",
    "ChatCompletionRequest",
    "parse_chat_request",
    "to_upstream",
]
