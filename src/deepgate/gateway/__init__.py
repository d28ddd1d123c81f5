"""deepgate gateway - OpenAI-compatible front for the chat upstream.

Components:
- Router: method+path dispatch, CORS on every response
- Forwarder: chat-completion translation and byte relay
- Model policies: pass-through or fixed-table mapping of model names

Usage (via compose.py):
    from deepgate.compose import create_gateway
    import asyncio

    asyncio.run(create_gateway(port=8000, model_policy="mapping"))

Usage (direct):
    from deepgate.gateway import GatewayConfig, GatewayServer
    import asyncio

    async def main():
        server = GatewayServer(config=GatewayConfig(model_policy="mapping"))
        await server.serve()

    asyncio.run(main())
"""

from deepgate.gateway.catalog import (
    MODEL_CATALOG,
    MODEL_MAPPING_TABLE,
    MappingPolicy,
    ModelDescriptor,
    ModelPolicy,
    PassthroughPolicy,
    get_policy,
)
from deepgate.gateway.errors import GatewayError, ModelNotFoundError
from deepgate.gateway.forwarder import Forwarder
from deepgate.gateway.router import CORS_HEADERS, Router
from deepgate.gateway.server import GatewayConfig, GatewayServer

__all__ = [
    "CORS_HEADERS",
    "MODEL_CATALOG",
    "MODEL_MAPPING_TABLE",
    "Forwarder",
    "GatewayConfig",
    "GatewayError",
    "GatewayServer",
    "MappingPolicy",
    "ModelDescriptor",
    "ModelNotFoundError",
    "ModelPolicy",
    "PassthroughPolicy",
    "Router",
    "get_policy",
]
