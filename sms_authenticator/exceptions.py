"""
SMS Authenticator Exceptions
============================
Error taxonomy for code issuance, delivery and verification.
"""

from enum import Enum
from typing import Optional


class FlowError(str, Enum):
    """Error kinds reported to the authentication flow engine."""
    INTERNAL_ERROR = "internal_error"
    INVALID_CREDENTIALS = "invalid_credentials"
    EXPIRED_CODE = "expired_code"
    INVALID_USER = "invalid_user"


class SmsAuthError(Exception):
    """Base exception for the SMS authentication step."""

    error_key: str = "smsAuthSmsNotSent"
    flow_error: FlowError = FlowError.INTERNAL_ERROR

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class InvalidFormat(SmsAuthError):
    """Raised when a destination phone number is missing or malformed."""

    def __init__(self, message: str, value: Optional[str] = None):
        super().__init__(message)
        self.value = value


class InvalidConfig(SmsAuthError):
    """Raised when a required option is missing or has an invalid value."""

    def __init__(self, message: str, key: Optional[str] = None):
        super().__init__(message)
        self.key = key


class DeliveryFailure(SmsAuthError):
    """Raised when the gateway could not deliver the message."""

    def __init__(self, message: str, provider: str = "unknown", error_code: Optional[str] = None):
        super().__init__(message)
        self.provider = provider
        self.error_code = error_code


class VerificationError(SmsAuthError):
    """Base class for failures while checking a submitted code."""
    flow_error = FlowError.INVALID_CREDENTIALS


class NoPendingCode(VerificationError):
    """Raised when the attempt has no issued code to compare against."""
    error_key = "smsAuthCodeMissing"
    flow_error = FlowError.INTERNAL_ERROR


class CodeExpired(VerificationError):
    error_key = "smsAuthCodeExpired"
    flow_error = FlowError.EXPIRED_CODE


class CodeMismatch(VerificationError):
    error_key = "smsAuthCodeInvalid"


class TooManyAttempts(VerificationError):
    """Raised when the configured number of failed verifications is reached."""
    error_key = "smsAuthTooManyAttempts"

    def __init__(self, message: str, limit: int):
        super().__init__(message)
        self.limit = limit
