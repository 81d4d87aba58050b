"""
devsetup CLI Package.

This module exports the CLI entry points for devsetup.
"""

from devsetup.cli.main import app, cli

__all__ = [
    "app",
    "cli",
]
