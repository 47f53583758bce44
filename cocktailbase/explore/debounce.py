from __future__ import annotations

import threading
from typing import Any, Callable

SEARCH_DEBOUNCE_SECONDS = 0.3


class Debouncer:
    """Run ``callback`` once input has been quiet for ``delay`` seconds.

    Every ``submit`` cancels the pending call and restarts the timer, so
    only the last submitted value is delivered.
    """

    def __init__(self, callback: Callable[[Any], None], delay: float = SEARCH_DEBOUNCE_SECONDS) -> None:
        self._callback = callback
        self._delay = delay
        self._lock = threading.Lock()
        self._timer: threading.Timer | None = None
        self._pending: Any = None
        self._has_pending = False

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._has_pending

    def submit(self, value: Any) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            self._pending = value
            self._has_pending = True
            self._timer = threading.Timer(self._delay, self._fire)
            self._timer.daemon = True
            self._timer.start()

    def _take(self) -> tuple[bool, Any]:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None
            has_value, value = self._has_pending, self._pending
            self._has_pending = False
            self._pending = None
            return has_value, value

    def _fire(self) -> None:
        has_value, value = self._take()
        if has_value:
            self._callback(value)

    def flush(self) -> None:
        """Deliver the pending value now instead of waiting for the timer."""
        self._fire()

    def cancel(self) -> None:
        self._take()
