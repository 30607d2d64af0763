"""
ModulePush CLI Package.

Requires Python 3.11+.
"""

from cli.app import build_parser, main, resolve_credentials, run

__all__ = ["build_parser", "main", "resolve_credentials", "run"]
