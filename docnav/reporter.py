"""Build diagnostics routed through the standard :mod:`logging` machinery.

Pipeline stages report progress and recoverable problems through a
:class:`Reporter` rather than printing directly, so the CLI decides how
messages reach the console while tests can capture them with ``caplog``.

Examples
--------
>>> from docnav.reporter import Reporter
>>> reporter = Reporter()
>>> reporter.success("nodes created: NavData")  # doctest: +SKIP
"""

from __future__ import annotations

import logging

SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")

LOGGER_NAME = "docnav"


class Reporter:
    """Emit info, warning, error, and success diagnostics for a build."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or logging.getLogger(LOGGER_NAME)

    def info(self, message: str) -> None:
        """Report routine progress."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Report a condition worth attention that does not affect output."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Report a recoverable failure; the build continues."""
        self.logger.error(message)

    def success(self, message: str) -> None:
        """Report completion of a build stage."""
        self.logger.log(SUCCESS, message)


__all__ = ["LOGGER_NAME", "SUCCESS", "Reporter"]
