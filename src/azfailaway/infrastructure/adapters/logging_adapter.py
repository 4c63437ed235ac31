"""LoggingPort backed by a standard library logger."""

import logging
from typing import Any

from azfailaway.domain.ports.logging_port import LoggingPort
from azfailaway.infrastructure.logging.logger import get_logger


class LoggingAdapter(LoggingPort):
    """
    Logs for one failover component under the ``azfailaway`` namespace.

    Records carry the location of the component code that logged them, not
    of this adapter. Disabled levels are dropped before any formatting.
    """

    # Frames between the component's call and Logger.log: the public method and _log
    _CALLER_STACKLEVEL = 3

    def __init__(self, component: str = "application") -> None:
        self.component = component
        self._logger = get_logger(component)

    def _log(self, level: int, message: str, args: tuple, kwargs: dict[str, Any]) -> None:
        if not self._logger.isEnabledFor(level):
            return
        kwargs.setdefault("stacklevel", self._CALLER_STACKLEVEL)
        self._logger.log(level, message, *args, **kwargs)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.DEBUG, message, args, kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.INFO, message, args, kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.WARNING, message, args, kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        self._log(logging.ERROR, message, args, kwargs)

    def exception(self, message: str, *args: Any, **kwargs: Any) -> None:
        kwargs.setdefault("exc_info", True)
        self._log(logging.ERROR, message, args, kwargs)
