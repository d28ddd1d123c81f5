"""Process-level plumbing shared by the gateway and the CLI."""

from deepgate.core.logging_config import JsonFormatter, configure_logging

__all__ = [
    "JsonFormatter",
    "configure_logging",
]
