"""
Cancellable repeating timer.

A single daemon thread sleeps on an Event between ticks, so cancelling
wakes it immediately instead of waiting out the interval.
"""

import threading
from typing import Callable, Optional

from loguru import logger


class RepeatingTimer:
    """Call *callback* every *interval* seconds until cancelled."""

    def __init__(self, interval: float, callback: Callable[[], object]) -> None:
        self.interval = interval
        self._callback = callback
        self._stopped = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def active(self) -> bool:
        return self._thread is not None and not self._stopped.is_set()

    def start(self) -> None:
        if self._thread is not None:
            raise RuntimeError("RepeatingTimer can only be started once")
        self._thread = threading.Thread(
            target=self._run, name="emission-timer", daemon=True
        )
        self._thread.start()

    def cancel(self) -> None:
        """Stop the timer; waits for an in-flight tick unless called from it."""
        self._stopped.set()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join()

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            try:
                self._callback()
            except Exception as exc:
                logger.error("Timer callback failed: {}", exc)
                self._stopped.set()
