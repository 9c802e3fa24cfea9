"""
OTP Validator
=============
Checks a submitted code against the attempt's pending code.
"""

import hmac
import time
from typing import Any, Optional

import structlog

from ..exceptions import CodeExpired, CodeMismatch, NoPendingCode, TooManyAttempts
from ..models import AuthenticationAttempt
from .models import Clock, now_millis
from .store import OtpAttemptStore

logger = structlog.get_logger(__name__)


class OtpValidator:
    """
    Verifies submitted codes.

    Every call is independent unless `max_attempts` is set, in which case
    mismatches are counted in the attempt's notes and verification stops
    once the limit is reached. Issuing a new code resets the count.
    """

    def __init__(
        self,
        store: Optional[OtpAttemptStore] = None,
        clock: Optional[Clock] = None,
        max_attempts: int = 0,
    ):
        self.store = store or OtpAttemptStore()
        self.clock = clock or time.time
        self.max_attempts = max_attempts

    def validate(self, attempt: AuthenticationAttempt, submitted: Optional[str]) -> None:
        """
        Validate a submitted code.

        Args:
            attempt: Current authentication attempt
            submitted: Code entered by the user, compared verbatim

        Raises:
            NoPendingCode: No code was issued for this attempt
            TooManyAttempts: The failure limit has been reached
            CodeExpired: The code is past its expiry
            CodeMismatch: The code differs from the issued one
        """
        pending = self.store.get(attempt)
        if pending is None:
            logger.warning("No pending code for attempt")
            raise NoPendingCode("No code has been issued for this attempt")

        if self.max_attempts and pending.failed_attempts >= self.max_attempts:
            logger.warning("Code attempts exhausted", limit=self.max_attempts)
            raise TooManyAttempts("Too many attempts", limit=self.max_attempts)

        if pending.is_expired(now_millis(self.clock)):
            logger.info("Code expired", expires_at=pending.expires_at)
            raise CodeExpired("Code expired")

        if not _codes_equal(submitted, pending.code):
            failures = self.store.record_failure(attempt)
            logger.warning("Invalid code attempt", failures=failures)
            raise CodeMismatch("Invalid code")

        logger.info("Code verified")


def _codes_equal(submitted: Any, expected: str) -> bool:
    if not isinstance(submitted, str):
        return False
    return hmac.compare_digest(
        submitted.encode("utf-8", errors="surrogatepass"),
        expected.encode("utf-8", errors="surrogatepass"),
    )
