"""
Outbound request rate limiter.

A leaky bucket that spaces upstream calls at least
``60 / max_per_minute`` seconds apart. Slots are reserved under
a lock and the caller then sleeps until its reserved slot, so
concurrent callers are released strictly one per interval.
"""

import logging
import threading
import time
from typing import Callable, Optional

logger = logging.getLogger(__name__)

SECONDS_PER_MINUTE = 60.0


class RequestRateLimiter:
    """Process-local limiter owned by a single upstream client.

    Args:
        max_per_minute: Maximum number of outbound requests per minute.
        clock: Monotonic time source in seconds.
        sleep: Blocking sleep function in seconds.
    """

    def __init__(
        self,
        max_per_minute: int,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_per_minute <= 0:
            raise ValueError(f"max_per_minute must be positive, got {max_per_minute}")
        self._interval = SECONDS_PER_MINUTE / max_per_minute
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_slot: Optional[float] = None

    @property
    def interval(self) -> float:
        """Minimum spacing between two outbound requests, in seconds."""
        return self._interval

    def acquire_slot(self, timeout: Optional[float] = None) -> bool:
        """Block until the caller may issue one outbound request.

        Args:
            timeout: Maximum number of seconds the caller is willing to wait.
                ``None`` waits as long as needed.

        Returns:
            True once a slot is granted, False if the wait would exceed
            ``timeout``. No slot is consumed when False is returned.
        """
        with self._lock:
            now = self._clock()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            wait = slot - now
            if timeout is not None and wait > timeout:
                logger.warning(
                    "Rate limit slot not available within %.2fs (wait %.2fs)",
                    timeout,
                    wait,
                )
                return False
            self._next_slot = slot + self._interval

        if wait > 0:
            logger.debug("Rate limiter delaying request by %.3fs", wait)
            self._sleep(wait)
        return True
