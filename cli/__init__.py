"""CLI package for the Neonomics client

This package provides a command-line interface for authenticating against
the Neonomics platform and browsing banks, accounts and transactions.
"""

from cli.cli_app import NeoCLI
from cli.main import main

__all__ = [
    "NeoCLI",
    "main",
]
