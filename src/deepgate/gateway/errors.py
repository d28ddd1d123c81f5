"""Error definitions and error bodies for the gateway.

Only two synthetic errors ever reach a chat-completion caller: a 400 for a
model the mapping policy does not know, and an opaque 500 for everything else.
"""

from __future__ import annotations

from typing import Any

INTERNAL_ERROR_MESSAGE = "Internal Server Error"
NOT_FOUND_MESSAGE = "Not Found"


class GatewayError(Exception):
    """Base class for errors raised by gateway components."""


class ModelNotFoundError(GatewayError):
    """Raised when a model name has no entry in the mapping table."""

    def __init__(self, model: str, available: list[str]):
        self.model = model
        self.available = available
        super().__init__(
            f"Model '{model}' not found. Available models: {', '.join(available)}"
        )


def error_body(message: str) -> dict[str, Any]:
    """JSON body used by both synthetic chat errors."""
    return {"error": message}
