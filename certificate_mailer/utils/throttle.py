"""Fixed-interval pause between outgoing emails."""

import time
from typing import Callable

from certificate_mailer.utils.logger import get_logger

logger = get_logger()

class Throttle:
    """Sleeps a fixed interval each time `pause` is called.

    The interval is a self-imposed rate limit against the Gmail and Docs
    quotas. A zero interval turns `pause` into a no-op, which is what the
    tests use.
    """

    def __init__(self, interval: float, sleep: Callable[[float], None] = time.sleep):
        if interval < 0:
            raise ValueError(f"Throttle interval must be non-negative, got {interval}")
        self.interval = interval
        self._sleep = sleep

    def pause(self) -> None:
        if self.interval <= 0:
            return
        logger.debug(f"Pausing {self.interval:.2f} seconds before the next recipient.")
        self._sleep(self.interval)
