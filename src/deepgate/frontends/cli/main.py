"""CLI entry point."""

from __future__ import annotations

import asyncio
import sys

import rich_click as click

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = True
click.rich_click.STYLE_ERRORS_SUGGESTION = "magenta italic"
click.rich_click.ERRORS_SUGGESTION = "Try running '--help' for more information."
click.rich_click.MAX_WIDTH = 100


@click.group()
@click.version_option(package_name="deepgate")
def cli() -> None:
    """deepgate - OpenAI-compatible gateway for the DeepSeek chat upstream.

    **Commands:**

        deepgate serve     Run the gateway

        deepgate models    Show the advertised model catalog
    """
    pass


@cli.command()
@click.option("--host", default=None, help="Host to bind (default: 127.0.0.1)")
@click.option("--port", type=int, default=None, help="Port to bind (default: 8000)")
@click.option(
    "--model-policy",
    type=click.Choice(["passthrough", "mapping"]),
    default=None,
    help="How model names reach the upstream (env DEEPGATE_MODEL_POLICY)",
)
@click.option(
    "--upstream-timeout",
    type=float,
    default=None,
    help="Seconds before an upstream call is abandoned (default: no timeout)",
)
@click.option("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"]),
    default=None,
    help="Log output format (env DEEPGATE_LOG_FORMAT)",
)
@click.option("--log-file", default=None, help="Also write logs to this file")
def serve(
    host: str | None,
    port: int | None,
    model_policy: str | None,
    upstream_timeout: float | None,
    log_level: str | None,
    log_format: str | None,
    log_file: str | None,
) -> None:
    """Run the gateway until interrupted.

    **Model policies:**

        passthrough   Forward the caller's model name untouched (default)

        mapping       deepseek-chat -> DeepSeek-V3, deepseek-reasoner -> DeepSeek-R1;
                      any other model is rejected with a 400

    **Examples:**

        deepgate serve

        deepgate serve --port 9000 --model-policy mapping

        DEEPGATE_LOG_FORMAT=json deepgate serve
    """
    from deepgate.compose import resolve_config, run_gateway
    from deepgate.core.logging_config import configure_logging

    try:
        configure_logging(
            level=log_level,
            format=log_format,  # type: ignore[arg-type]
            file_path=log_file,
        )
        config = resolve_config(
            host=host,
            port=port,
            model_policy=model_policy,
            upstream_timeout=upstream_timeout,
        )
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(f"Starting deepgate on http://{config.host}:{config.port} ({config.model_policy})")
    try:
        asyncio.run(run_gateway(config))
    except KeyboardInterrupt:
        pass
    click.echo("Stopped.")


@cli.command()
@click.option("--json", "-j", "json_output", is_flag=True, help="Output as JSON")
def models(json_output: bool) -> None:
    """Show the model catalog served at /v1/models."""
    from deepgate.frontends.cli.output import output_json, print_models
    from deepgate.gateway.catalog import MODEL_CATALOG, model_list_payload

    if json_output:
        output_json(model_list_payload(MODEL_CATALOG))
    else:
        print_models(MODEL_CATALOG)


def main() -> None:
    """Main entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
