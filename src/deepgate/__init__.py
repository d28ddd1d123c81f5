"""deepgate - OpenAI-compatible gateway for a fixed chat upstream.

Exposes `/v1/models` and `/v1/chat/completions` in OpenAI shape and forwards
chat completions to a single upstream, relaying its status, content type and
body bytes (streamed or not) back to the caller.

Layers:
    gateway/    Routing, forwarding, model policies, upstream request shape
    core/       Process plumbing (logging)
    frontends/  CLI
    compose.py  Configuration resolution and process entry

Quick Start:
    >>> from deepgate.gateway import GatewayConfig, GatewayServer
    >>>
    >>> server = GatewayServer(config=GatewayConfig(port=8000, model_policy="mapping"))
    >>> await server.serve()
"""

__version__ = "0.1.0"
