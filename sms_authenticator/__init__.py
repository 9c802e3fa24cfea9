"""
SMS Authenticator
=================
SMS one-time-passcode step for an identity provider's authentication flow.
"""

__version__ = "0.1.0"

# Step
from sms_authenticator.authenticator import (
    SmsAuthenticator,
    StepOutcome,
    OutcomeKind,
    FormPage,
    PROVIDER_ID,
    TPL_CODE,
)

# Configuration
from sms_authenticator.config import StepConfig, GatewayConfig

# Errors
from sms_authenticator.exceptions import (
    FlowError,
    SmsAuthError,
    InvalidFormat,
    InvalidConfig,
    DeliveryFailure,
    VerificationError,
    NoPendingCode,
    CodeExpired,
    CodeMismatch,
    TooManyAttempts,
)

# Host model
from sms_authenticator.models import (
    Principal,
    AuthenticationAttempt,
    InMemoryAttempt,
    MOBILE_NUMBER_FIELD,
)

# Components
from sms_authenticator.phone import validate_phone_number, mask_phone
from sms_authenticator.eligibility import is_eligible
from sms_authenticator.otp import OtpIssuer, OtpAttemptStore, OtpValidator, PendingCode, generate_code
from sms_authenticator.messages import MessageFormatter, CatalogMessageFormatter

# Gateways
from sms_authenticator.gateways import (
    SmsGateway,
    SendResult,
    MessageStatus,
    GatewayRegistry,
    gateway_registry,
)

__all__ = [
    # Step
    "SmsAuthenticator",
    "StepOutcome",
    "OutcomeKind",
    "FormPage",
    "PROVIDER_ID",
    "TPL_CODE",
    # Configuration
    "StepConfig",
    "GatewayConfig",
    # Errors
    "FlowError",
    "SmsAuthError",
    "InvalidFormat",
    "InvalidConfig",
    "DeliveryFailure",
    "VerificationError",
    "NoPendingCode",
    "CodeExpired",
    "CodeMismatch",
    "TooManyAttempts",
    # Host model
    "Principal",
    "AuthenticationAttempt",
    "InMemoryAttempt",
    "MOBILE_NUMBER_FIELD",
    # Components
    "validate_phone_number",
    "mask_phone",
    "is_eligible",
    "OtpIssuer",
    "OtpAttemptStore",
    "OtpValidator",
    "PendingCode",
    "generate_code",
    "MessageFormatter",
    "CatalogMessageFormatter",
    # Gateways
    "SmsGateway",
    "SendResult",
    "MessageStatus",
    "GatewayRegistry",
    "gateway_registry",
]
