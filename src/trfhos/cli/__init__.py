"""Command line interface for trf-hos-finder."""

from trfhos.cli.main import cli, main

__all__ = ["cli", "main"]
