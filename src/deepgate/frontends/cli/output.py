"""Output formatting for CLI commands."""

from __future__ import annotations

import json
from typing import Any

import rich_click as click
from rich.console import Console
from rich.table import Table

from deepgate.gateway.catalog import MODEL_MAPPING_TABLE, ModelDescriptor


def output_json(data: Any, indent: int = 2) -> None:
    """Output data as formatted JSON."""
    click.echo(json.dumps(data, indent=indent))


def models_table(catalog: tuple[ModelDescriptor, ...]) -> Table:
    """Render the catalog, with the upstream name the mapping policy would use."""
    table = Table(title="Advertised models")
    table.add_column("ID", style="cyan")
    table.add_column("Owned by")
    table.add_column("Created", justify="right")
    table.add_column("Upstream (mapping policy)", style="magenta")

    for model in catalog:
        table.add_row(
            model.id,
            model.owned_by,
            str(model.created),
            MODEL_MAPPING_TABLE.get(model.id, "-"),
        )
    return table


def print_models(catalog: tuple[ModelDescriptor, ...], console: Console | None = None) -> None:
    (console or Console()).print(models_table(catalog))
