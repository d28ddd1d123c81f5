"""Composition helpers: resolve configuration and run the gateway.

Configuration priority:
1. Function arguments (highest)
2. Environment variables (DEEPGATE_*)
3. GatewayConfig defaults
"""

from __future__ import annotations

import asyncio
import logging
import os
import signal
from collections.abc import Mapping

from deepgate.gateway.server import GatewayConfig, GatewayServer

logger = logging.getLogger(__name__)

ENV_HOST = "DEEPGATE_HOST"
ENV_PORT = "DEEPGATE_PORT"
ENV_MODEL_POLICY = "DEEPGATE_MODEL_POLICY"
ENV_UPSTREAM_TIMEOUT = "DEEPGATE_UPSTREAM_TIMEOUT"


def resolve_config(
    host: str | None = None,
    port: int | None = None,
    model_policy: str | None = None,
    upstream_timeout: float | None = None,
    environ: Mapping[str, str] | None = None,
) -> GatewayConfig:
    """Build a GatewayConfig from arguments, then environment, then defaults.

    Args:
        host: Host to bind (or DEEPGATE_HOST).
        port: Port to bind (or DEEPGATE_PORT).
        model_policy: "passthrough" or "mapping" (or DEEPGATE_MODEL_POLICY).
        upstream_timeout: Seconds before giving up on the upstream
            (or DEEPGATE_UPSTREAM_TIMEOUT). Unset means no timeout.
        environ: Environment to read; defaults to os.environ.

    Raises:
        ValueError: If a value cannot be parsed or the policy is unknown.
    """
    env = os.environ if environ is None else environ
    defaults = GatewayConfig()

    def get_value(arg: object, env_key: str) -> str | None:
        if arg is not None:
            return str(arg)
        return env.get(env_key) or None

    resolved_port = get_value(port, ENV_PORT)
    resolved_timeout = get_value(upstream_timeout, ENV_UPSTREAM_TIMEOUT)

    try:
        port_value = int(resolved_port) if resolved_port else defaults.port
    except ValueError as err:
        raise ValueError(f"Invalid port: {resolved_port!r}") from err
    try:
        timeout_value = float(resolved_timeout) if resolved_timeout else None
    except ValueError as err:
        raise ValueError(f"Invalid upstream timeout: {resolved_timeout!r}") from err

    policy = get_value(model_policy, ENV_MODEL_POLICY) or defaults.model_policy

    return GatewayConfig(
        host=get_value(host, ENV_HOST) or defaults.host,
        port=port_value,
        model_policy=policy,  # type: ignore[arg-type]
        upstream_timeout=timeout_value,
    )


async def run_gateway(config: GatewayConfig) -> None:
    """Run a gateway until SIGINT/SIGTERM."""
    server = GatewayServer(config=config)

    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, server.request_shutdown)
        except NotImplementedError:
            # Windows event loops have no signal handlers; Ctrl+C still
            # raises KeyboardInterrupt out of asyncio.run().
            logger.debug("Signal handlers not supported on this platform")
            break

    await server.serve()


async def create_gateway(
    host: str | None = None,
    port: int | None = None,
    model_policy: str | None = None,
    upstream_timeout: float | None = None,
) -> None:
    """Resolve configuration and run the gateway until stopped.

    Example:
        >>> # export DEEPGATE_MODEL_POLICY=mapping
        >>> await create_gateway(port=8000)
    """
    config = resolve_config(
        host=host,
        port=port,
        model_policy=model_policy,
        upstream_timeout=upstream_timeout,
    )
    await run_gateway(config)
