"""
OTP Issuer
==========
Code generation and expiry computation, independent of transport.
"""

import secrets
import time
from typing import Optional

from ..config import CODE_LENGTH, CODE_TTL, MAX_CODE_LENGTH, StepConfig
from ..exceptions import InvalidConfig
from .models import Clock, PendingCode, now_millis


def generate_code(length: int) -> str:
    """
    Generate a numeric code from a cryptographically strong source.

    Leading zeros are kept, so the result always has `length` digits.
    """
    if not 1 <= length <= MAX_CODE_LENGTH:
        raise InvalidConfig(f"Code length must be between 1 and {MAX_CODE_LENGTH}", key=CODE_LENGTH)
    return str(secrets.randbelow(10 ** length)).zfill(length)


class OtpIssuer:
    """Issues a fresh (code, expiry) pair per attempt."""

    def __init__(self, clock: Optional[Clock] = None):
        self.clock = clock or time.time

    def issue(self, config: StepConfig) -> PendingCode:
        """
        Issue a new code.

        Args:
            config: Parsed step configuration

        Returns:
            PendingCode expiring `config.ttl_seconds` from now

        Raises:
            InvalidConfig: If the TTL is not positive
        """
        if config.ttl_seconds <= 0:
            raise InvalidConfig("Code TTL must be positive", key=CODE_TTL)

        code = generate_code(config.code_length)
        expires_at = now_millis(self.clock) + config.ttl_seconds * 1000
        return PendingCode(code=code, expires_at=expires_at)
