"""Request shape expected by the upstream chat endpoint."""

from __future__ import annotations

from typing import Any

from deepgate.gateway.transforms.validation import ChatCompletionRequest

UPSTREAM_URL = "https://ai-chatbot-starter.edgeone.app/api/ai"

# The upstream rejects requests that do not look like they come from a browser.
UPSTREAM_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/140.0.0.0 Safari/537.36 Edg/140.0.0.0"
)

UPSTREAM_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json, text/event-stream",
    "User-Agent": UPSTREAM_USER_AGENT,
}

DEFAULT_CONTENT_TYPE = "application/json"


def to_upstream(request: ChatCompletionRequest, model: str) -> dict[str, Any]:
    """Build the upstream body for an already-resolved model name.

    `messages` and `stream` are copied only when the caller sent them; an
    absent `stream` must stay absent rather than become `null`.
    """
    body: dict[str, Any] = {"model": model}
    if request.has_messages:
        body["messages"] = request.messages
    if request.has_stream:
        body["stream"] = request.stream
    return body
