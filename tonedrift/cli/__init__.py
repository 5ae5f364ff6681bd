"""CLI commands for tonedrift.

This package provides the command-line interface: config setup,
one-shot file analysis and the interactive journal editor.
"""

from tonedrift.cli.main import cli, main

__all__ = ["cli", "main"]
