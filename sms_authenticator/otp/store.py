"""
OTP Attempt Store
=================
Keeps the pending code in the attempt's session notes.

Notes only hold strings, so the expiry is written as a decimal string of
epoch milliseconds. The key names are shared with existing deployments and
must not change.
"""

from typing import Optional

import structlog

from ..models import AuthenticationAttempt
from .models import PendingCode

logger = structlog.get_logger(__name__)

CODE_NOTE = "code"
CODE_TTL_NOTE = "ttl"
ATTEMPTS_NOTE = "attempts"


class OtpAttemptStore:
    """At most one pending code per attempt; put() replaces the previous one."""

    def put(self, attempt: AuthenticationAttempt, code: str, expires_at: int) -> None:
        attempt.set_auth_note(CODE_NOTE, code)
        attempt.set_auth_note(CODE_TTL_NOTE, str(expires_at))
        # a new code starts with a clean failure count
        attempt.remove_auth_note(ATTEMPTS_NOTE)

    def get(self, attempt: AuthenticationAttempt) -> Optional[PendingCode]:
        code = attempt.get_auth_note(CODE_NOTE)
        expires_at = attempt.get_auth_note(CODE_TTL_NOTE)
        if code is None or expires_at is None:
            return None

        try:
            expiry = int(expires_at)
        except ValueError:
            logger.warning("Unreadable code expiry note", value=expires_at)
            return None

        return PendingCode(
            code=code,
            expires_at=expiry,
            failed_attempts=_parse_count(attempt.get_auth_note(ATTEMPTS_NOTE)),
        )

    def record_failure(self, attempt: AuthenticationAttempt) -> int:
        """Increment and return the failed verification count."""
        count = _parse_count(attempt.get_auth_note(ATTEMPTS_NOTE)) + 1
        attempt.set_auth_note(ATTEMPTS_NOTE, str(count))
        return count


def _parse_count(value: Optional[str]) -> int:
    if not value:
        return 0
    try:
        return max(int(value), 0)
    except ValueError:
        return 0
