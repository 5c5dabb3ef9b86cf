"""Logging setup for the server process."""

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """
    Install a single stream handler on the root logger.

    Replaces handlers left over from earlier calls so the server can be
    restarted in-process without duplicating output.
    """
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT, force=True)
