"""Logging helper for co2_monitor.

Wraps Python's standard logger. Messages logged through an instance created
with an ``entry_id`` are prefixed with ``[xxxxx]`` so that multiple config
entries can be told apart in the Home Assistant log.
"""

from __future__ import annotations

import logging
from typing import Any

# Logger name is the integration package, e.g. "custom_components.co2_monitor"
_LOGGER_NAME: str = __name__.rpartition(".")[0] or __name__

# Number of trailing entry_id characters shown in the prefix
_PREFIX_LENGTH: int = 5


#
# Log
#
class Log:
    """Logger with an optional per-entry message prefix."""

    #
    # __init__
    #
    def __init__(self, entry_id: str | None = None) -> None:
        """Initialize the logger.

        Args:
            entry_id: Config entry ID. When set, messages are prefixed with
                the last characters of the ID.
        """

        self._logger = logging.getLogger(_LOGGER_NAME)
        self._prefix = f"[{entry_id[-_PREFIX_LENGTH:]}] " if entry_id else ""

    #
    # underlying_logger
    #
    @property
    def underlying_logger(self) -> logging.Logger:
        """Return the wrapped standard logger (e.g. for HA helpers that need one)."""

        return self._logger

    #
    # prefix
    #
    @property
    def prefix(self) -> str:
        """Return the message prefix (empty without entry_id)."""

        return self._prefix

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug message."""

        self._logger.debug(self._prefix + msg, *args, **kwargs)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an info message."""

        self._logger.info(self._prefix + msg, *args, **kwargs)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning message."""

        self._logger.warning(self._prefix + msg, *args, **kwargs)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an error message."""

        self._logger.error(self._prefix + msg, *args, **kwargs)

    def exception(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """Log an error message with the current exception's stack trace."""

        self._logger.exception(self._prefix + msg, *args, **kwargs)
