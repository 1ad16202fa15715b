#  Copyright (c) 2025 Tom Villani, Ph.D.

# src/rxmd/cli/commands/__init__.py
"""Subcommand dispatch for the rxmd CLI."""

import logging
import sys

logger = logging.getLogger(__name__)


def dispatch_command(args: list[str] | None = None) -> int | None:
    """Run a subcommand if ``args`` names one.

    Parameters
    ----------
    args : list[str], optional
        Command line arguments, defaults to ``sys.argv[1:]``

    Returns
    -------
    int or None
        Exit code if a subcommand was handled, None otherwise

    """
    if args is None:
        args = sys.argv[1:]

    if not args:
        return None

    if args[0] in ("list-transforms", "transforms"):
        from rxmd.cli.commands.transforms import handle_list_transforms_command

        return handle_list_transforms_command(args[1:])

    return None


__all__ = ["dispatch_command"]
