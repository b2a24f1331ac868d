"""CLI package bootstrap.

Exposes the ``cli`` command defined in :mod:`byteclasser.cli.core`.
"""
# Absolute import keeps `python -m byteclasser.cli` and console scripts aligned
from byteclasser.cli.core import cli

__all__ = ["cli"]
