"""
OTP Models
==========
The pending code held for one authentication attempt.
"""

import time
from dataclasses import dataclass
from typing import Callable

Clock = Callable[[], float]


def now_millis(clock: Clock = time.time) -> int:
    """Current time as epoch milliseconds."""
    return int(clock() * 1000)


@dataclass
class PendingCode:
    """An issued code and its absolute expiry."""
    code: str
    expires_at: int  # epoch milliseconds
    failed_attempts: int = 0

    def is_expired(self, now_ms: int) -> bool:
        return now_ms > self.expires_at
