"""Logging setup with Rich integration."""

import logging

from rich.logging import RichHandler

from stackctl.utils.formatting import err_console


def configure_logging(verbose: bool = False, quiet: bool = False) -> None:
    """Route standard logging through a Rich handler on stderr.

    Args:
        verbose: Show DEBUG records (every probe and command).
        quiet: Show only errors.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    handler = RichHandler(console=err_console, show_time=verbose, show_path=False)
    logging.basicConfig(level=level, handlers=[handler], format="%(message)s", force=True)
