"""Model catalog and model-name policies.

The catalog is what `GET /v1/models` advertises. A `ModelPolicy` decides which
model name the upstream receives for a given public model name:

- `PassthroughPolicy` forwards the caller's string untouched.
- `MappingPolicy` translates through `MODEL_MAPPING_TABLE` and rejects anything
  outside it with `ModelNotFoundError`.

Both tables are built once at import and never mutated.
"""

from __future__ import annotations

import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Literal, Protocol

from deepgate.gateway.errors import ModelNotFoundError

PolicyName = Literal["passthrough", "mapping"]


@dataclass(frozen=True)
class ModelDescriptor:
    """One entry of the OpenAI-style model list."""

    id: str
    created: int
    owned_by: str = "system"
    object: str = "model"

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "object": self.object,
            "created": self.created,
            "owned_by": self.owned_by,
        }


def build_catalog(created: int | None = None) -> tuple[ModelDescriptor, ...]:
    """Build the advertised model list, stamped with `created` (default: now)."""
    if created is None:
        created = int(time.time())
    return (
        ModelDescriptor(id="deepseek-chat", created=created),
        ModelDescriptor(id="deepseek-reasoner", created=created),
    )


MODEL_CATALOG: tuple[ModelDescriptor, ...] = build_catalog()

MODEL_MAPPING_TABLE: Mapping[str, str] = MappingProxyType(
    {
        "deepseek-reasoner": "DeepSeek-R1",
        "deepseek-chat": "DeepSeek-V3",
    }
)


def model_list_payload(catalog: tuple[ModelDescriptor, ...] = MODEL_CATALOG) -> dict[str, Any]:
    """Body for `GET /v1/models`."""
    return {"object": "list", "data": [model.to_dict() for model in catalog]}


class ModelPolicy(Protocol):
    """Resolves a public model name to the name sent upstream."""

    name: str

    def resolve(self, model: str) -> str: ...


@dataclass(frozen=True)
class PassthroughPolicy:
    """Identity policy: the upstream sees exactly what the caller sent."""

    name: str = "passthrough"

    def resolve(self, model: str) -> str:
        return model


@dataclass(frozen=True)
class MappingPolicy:
    """Table-lookup policy. Unknown names are rejected, never passed through."""

    table: Mapping[str, str] = field(default_factory=lambda: MODEL_MAPPING_TABLE)
    name: str = "mapping"

    def resolve(self, model: str) -> str:
        try:
            return self.table[model]
        except KeyError:
            raise ModelNotFoundError(model, list(self.table)) from None


def get_policy(name: str) -> ModelPolicy:
    """Look up a policy by its configuration name.

    Raises:
        ValueError: If the name is not "passthrough" or "mapping".
    """
    if name == "passthrough":
        return PassthroughPolicy()
    if name == "mapping":
        return MappingPolicy()
    raise ValueError(f"Unknown model policy: {name!r} (expected 'passthrough' or 'mapping')")
