"""Command-line interface."""

from resilient_cms.cli.commands import cli


__all__ = ["cli"]
