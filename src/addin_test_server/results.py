"""Single-resolution container for the posted test results."""
from __future__ import annotations

import threading
from typing import Any


class ResultsFuture:
    """Holds one JSON value, written at most once and read any number of times.

    Readers block in :meth:`result` until the first :meth:`set_result` call.
    """

    def __init__(self) -> None:
        self._resolved = threading.Event()
        self._lock = threading.Lock()
        self._value: Any = None

    def set_result(self, value: Any) -> bool:
        """Resolve with ``value``. Returns False if already resolved."""
        with self._lock:
            if self._resolved.is_set():
                return False
            self._value = value
            self._resolved.set()
            return True

    def done(self) -> bool:
        return self._resolved.is_set()

    def result(self, timeout: float | None = None) -> Any:
        if not self._resolved.wait(timeout):
            raise TimeoutError(f"No test results received within {timeout} seconds")
        return self._value
