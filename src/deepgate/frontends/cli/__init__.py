"""deepgate command line interface."""

from deepgate.frontends.cli.main import cli, main

__all__ = ["cli", "main"]
