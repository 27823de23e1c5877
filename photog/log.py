"""
Build output.

Progress, warnings and errors all go through one module logger. How much
of it is shown is decided by a LogConfig that the caller passes down into
the loader and the builder.
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger("photog")


@dataclass
class LogConfig:
    verbose: bool = False
    silent: bool = False

    def debug(self, msg: str, *args):
        if self.verbose and not self.silent:
            logger.info(msg, *args)

    def info(self, msg: str, *args):
        if not self.silent:
            logger.info(msg, *args)

    def warning(self, msg: str, *args):
        if not self.silent:
            logger.warning(msg, *args)

    def error(self, msg: str, *args):
        logger.error(msg, *args)


class PlainFormatter(logging.Formatter):
    """Progress lines as they are, warnings and errors with their level."""

    def format(self, record):
        msg = super().format(record)
        if record.levelno >= logging.WARNING:
            return f"{record.levelname}: {msg}"
        return msg


def setup_logging(level=logging.INFO):
    """Print plain messages to stderr, the way a batch tool should."""
    handler = logging.StreamHandler()
    handler.setFormatter(PlainFormatter("%(message)s"))
    logging.basicConfig(level=level, handlers=[handler])
