"""
Sink for errors that cards report while the session keeps running.
"""

import logging
from typing import List

from cli.formatters import print_error


logger = logging.getLogger(__name__)


class ObservabilityScope:
    """Reports recoverable errors to the user and the log."""

    def __init__(self, echo: bool = True, colorize: bool = False):
        self.echo = echo
        self.colorize = colorize
        self.emitted: List[BaseException] = []

    def emit(self, error: BaseException) -> None:
        """Record and report an error; nothing is returned to the caller."""
        self.emitted.append(error)
        logger.debug(f"Card reported {type(error).__name__}: {error}")
        if self.echo:
            print_error(str(error), colorize=self.colorize)
