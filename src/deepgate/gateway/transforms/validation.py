"""Pydantic model for the inbound OpenAI chat-completion request.

Only the fields the upstream understands are modelled; every other OpenAI
parameter (temperature, tools, ...) is accepted and dropped.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class ChatCompletionRequest(BaseModel):
    """OpenAI `/v1/chat/completions` request body, as far as the gateway cares."""

    model_config = ConfigDict(extra="ignore")

    model: str
    # Forwarded verbatim; the upstream is the judge of its shape.
    messages: Any = None
    stream: Any = None

    @property
    def has_messages(self) -> bool:
        return "messages" in self.model_fields_set

    @property
    def has_stream(self) -> bool:
        """True when the caller sent a `stream` key at all, even `false` or `null`."""
        return "stream" in self.model_fields_set


def parse_chat_request(raw_body: bytes | str) -> ChatCompletionRequest:
    """Parse and validate a raw request body.

    Raises:
        pydantic.ValidationError: On invalid JSON, a non-object body, or a
            missing/non-string `model`.
    """
    return ChatCompletionRequest.model_validate_json(raw_body)
