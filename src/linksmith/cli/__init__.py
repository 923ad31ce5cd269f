"""CLI entrypoints for linksmith."""

from linksmith.cli.setup import app

__all__ = ["app"]
