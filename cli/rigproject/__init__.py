"""Rig project CLI.

Command-line interface for creating extension projects.
"""

__version__ = "0.1.0"

from cli.rigproject.cli import app, main

__all__ = ["__version__", "app", "main"]
