"""
OTP Lifecycle
=============
Issuance, per-attempt storage and verification of SMS codes.
"""

from .models import PendingCode, now_millis
from .issuer import OtpIssuer, generate_code
from .store import OtpAttemptStore, CODE_NOTE, CODE_TTL_NOTE, ATTEMPTS_NOTE
from .validator import OtpValidator

__all__ = [
    # Models
    "PendingCode",
    "now_millis",
    # Issuer
    "OtpIssuer",
    "generate_code",
    # Store
    "OtpAttemptStore",
    "CODE_NOTE",
    "CODE_TTL_NOTE",
    "ATTEMPTS_NOTE",
    # Validator
    "OtpValidator",
]
