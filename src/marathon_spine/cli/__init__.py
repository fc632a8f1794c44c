"""
CLI layer for marathon-spine.

Terminal transport only: argument parsing and output. Building and lookups
live in :mod:`marathon_spine.container`.

Entry point::

    marathon-spine --help
"""

from marathon_spine.cli.app import app

__all__ = ["app"]
