"""
partinfo CLI Module.

Provides the command-line interface for partinfo.
"""

from partinfo.cli.main import cli, main

__all__ = ["main", "cli"]
