"""Logging setup for the CLI process."""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from firebase_cli.client.errors import err_console

PACKAGE_LOGGER = "firebase_cli"


def configure_logging(debug: bool = False) -> None:
    """Route this package's log records to stderr; ``--debug`` lowers the threshold to DEBUG."""
    logger = logging.getLogger(PACKAGE_LOGGER)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)
    handler = RichHandler(console=err_console, show_path=debug, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
