# src/quire/pacing.py
"""Minimum-interval pacing for outbound provider calls."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class PacingGate:
    """Enforces a minimum interval between consecutive provider calls.

    One gate is constructed per Quire instance and shared by reference between
    the embedding and chat clients, so ingestion and queries running on
    different threads are paced together.

    acquire() waits and stamps while holding the lock; callers therefore leave
    the gate at least min_interval apart. The provider call itself happens
    outside the lock.

    Example:
        gate = PacingGate(min_interval=0.8)
        gate.acquire()
        response = session.post(...)
    """

    def __init__(
        self,
        min_interval: float = 0.8,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        """Initialize the gate.

        Args:
            min_interval: Minimum seconds between calls. 0 disables pacing.
            clock: Monotonic clock returning seconds.
            sleep: Function used to wait.
        """
        if min_interval < 0:
            raise ValueError(f"min_interval must be >= 0, got {min_interval}")
        self.min_interval = min_interval
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._last_call: float | None = None

    def acquire(self) -> None:
        """Block until the interval since the previous call has elapsed."""
        with self._lock:
            if self._last_call is not None:
                wait = self._last_call + self.min_interval - self._clock()
                if wait > 0:
                    logger.debug("Pacing provider call for %.3fs", wait)
                    self._sleep(wait)
            self._last_call = self._clock()
