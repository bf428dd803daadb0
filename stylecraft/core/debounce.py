"""Single-slot debouncing on top of a Qt timer."""

from __future__ import annotations

from typing import Any, Callable, Optional, Tuple

from PyQt6 import QtCore


class Debouncer(QtCore.QObject):
    """Delay ``callback`` until ``delay_ms`` passes without another call.

    Only the most recent arguments are kept; a new call restarts the timer
    instead of queuing a second one.
    """

    def __init__(
        self,
        delay_ms: int,
        callback: Callable[..., Any],
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._args: Optional[Tuple[Any, ...]] = None
        self._timer = QtCore.QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(delay_ms)
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._args is not None

    def call(self, *args: Any) -> None:
        self._args = args
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._args = None

    def flush(self) -> None:
        if self._args is not None:
            self._timer.stop()
            self._fire()

    def _fire(self) -> None:
        args, self._args = self._args, None
        if args is not None:
            self._callback(*args)
