"""Error-reporting sinks for rejected submit actions.

A reporter is any object matching::

    def report(error: BaseException) -> None: ...

No base class required. The controller checks the shape, not the lineage.
"""

import logging
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from formstate.notify import Notifier

logger = logging.getLogger("formstate.submit")


class ErrorReporter(Protocol):
    """Protocol for submission-failure sinks."""

    def report(self, error: BaseException) -> None: ...


class LoggingReporter:
    """Default reporter: logs the failure with its traceback."""

    __slots__ = ("_logger",)

    def __init__(self, log: logging.Logger | None = None) -> None:
        self._logger = log or logger

    def report(self, error: BaseException) -> None:
        self._logger.error(
            "Form submission error: %s", error,
            exc_info=(type(error), error, error.__traceback__),
        )


class NotifyingReporter(LoggingReporter):
    """Logs the failure and shows an ``error`` toast.

    Usage::

        async with Notifier() as notifier:
            form = FormController(values, schema, reporter=NotifyingReporter(notifier))
    """

    __slots__ = ("_message", "_notifier")

    def __init__(
        self,
        notifier: "Notifier",
        message: str = "Something went wrong. Please try again.",
        log: logging.Logger | None = None,
    ) -> None:
        super().__init__(log)
        self._notifier = notifier
        self._message = message

    def report(self, error: BaseException) -> None:
        super().report(error)
        if self._notifier.running:
            self._notifier.emit(self._message, "error")
