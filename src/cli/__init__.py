"""CLI module - command line entry point.

TIER 2: May import from core and lib.
"""

from cli.main import build_parser, main

__all__ = ["build_parser", "main"]
