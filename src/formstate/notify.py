"""Page-level toast notifications with an explicit lifecycle.

The notifier is created when the app starts and torn down when it ends::

    async with Notifier() as notifier:
        notifier.emit("Donation request created")
        notifier.emit("Could not reach the server", "error", duration=5.0)
        ...

Each toast removes itself after its duration. Timers run in an ``anyio``
task group owned by the notifier; leaving the ``async with`` block
cancels any that are still pending and clears the list.
"""

import itertools
import logging
from dataclasses import dataclass
from types import TracebackType

import anyio
from anyio.abc import TaskGroup

from formstate.config import NotifierConfig
from formstate.errors import NotifierClosedError

logger = logging.getLogger("formstate.notify")

TOAST_KINDS = frozenset({"success", "error", "warning", "info"})


@dataclass(frozen=True, slots=True)
class Toast:
    """One visible notification."""

    id: int
    message: str
    kind: str
    duration: float


class Notifier:
    """Owns the list of visible toasts and their expiry timers."""

    def __init__(self, config: NotifierConfig | None = None) -> None:
        self._config = config or NotifierConfig()
        self._toasts: list[Toast] = []
        self._ids = itertools.count(1)
        self._task_group: TaskGroup | None = None

    async def __aenter__(self) -> "Notifier":
        if self._task_group is not None:
            msg = "Notifier is already running"
            raise RuntimeError(msg)
        task_group = anyio.create_task_group()
        await task_group.__aenter__()
        self._task_group = task_group
        logger.debug("Notifier started")
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        task_group = self._task_group
        self._task_group = None
        self._toasts.clear()
        if task_group is None:
            return
        task_group.cancel_scope.cancel()
        await task_group.__aexit__(None, None, None)
        logger.debug("Notifier stopped")

    @property
    def running(self) -> bool:
        return self._task_group is not None

    @property
    def toasts(self) -> tuple[Toast, ...]:
        """Toasts currently visible, oldest first."""
        return tuple(self._toasts)

    def emit(self, message: str, kind: str = "success", duration: float | None = None) -> Toast:
        """Show *message* and schedule its removal.

        Raises:
            ValueError: *kind* is not one of success, error, warning, info.
            NotifierClosedError: called outside ``async with``.
        """
        if kind not in TOAST_KINDS:
            msg = f"Unknown toast kind {kind!r}; expected one of {sorted(TOAST_KINDS)}"
            raise ValueError(msg)
        if self._task_group is None:
            msg = "Notifier is not running; use 'async with Notifier()'"
            raise NotifierClosedError(msg)

        toast = Toast(
            id=next(self._ids),
            message=message,
            kind=kind,
            duration=self._config.default_duration if duration is None else duration,
        )
        self._toasts.append(toast)

        limit = self._config.max_toasts
        if limit is not None and len(self._toasts) > limit:
            del self._toasts[: len(self._toasts) - limit]

        self._task_group.start_soon(self._expire, toast.id, toast.duration)
        return toast

    def dismiss(self, toast_id: int) -> bool:
        """Remove a toast early. Returns False if it is already gone."""
        for index, toast in enumerate(self._toasts):
            if toast.id == toast_id:
                del self._toasts[index]
                return True
        return False

    async def _expire(self, toast_id: int, delay: float) -> None:
        await anyio.sleep(delay)
        self.dismiss(toast_id)
