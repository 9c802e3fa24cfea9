"""
SMS Authenticator Step
======================
Entry points called by the flow engine: eligibility, begin (issue and send
a code) and resume (verify the submitted code).

Usage:
    authenticator = SmsAuthenticator()

    if authenticator.configured_for(principal):
        outcome = authenticator.begin(principal, config, attempt, locale="en")
        ...
        outcome = authenticator.resume(attempt, form, config=config, principal=principal)
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

import structlog

from .config import StepConfig
from .eligibility import is_eligible
from .exceptions import (
    DeliveryFailure,
    FlowError,
    InvalidFormat,
    NoPendingCode,
    SmsAuthError,
    TooManyAttempts,
    VerificationError,
)
from .gateways import GatewayRegistry, gateway_registry
from .messages import CatalogMessageFormatter, MessageFormatter
from .models import MOBILE_NUMBER_FIELD, AuthenticationAttempt, Principal
from .otp import OtpAttemptStore, OtpIssuer, OtpValidator
from .otp.models import Clock
from .phone import mask_phone, validate_phone_number

logger = structlog.get_logger(__name__)

PROVIDER_ID = "sms-authenticator"
TPL_CODE = "login-sms.ftl"
CODE_FIELD = "code"


class OutcomeKind(str, Enum):
    ADVANCE = "advance"
    CHALLENGE = "challenge"
    FAILURE = "failure"


@dataclass
class FormPage:
    """A form or error page for the flow engine to render."""
    template: Optional[str] = None  # None renders the generic error page
    error: Optional[str] = None
    error_args: Tuple[str, ...] = ()
    attributes: Dict[str, Any] = field(default_factory=dict)
    status_code: int = 200


@dataclass
class StepOutcome:
    """What the flow engine should do after a step invocation."""
    kind: OutcomeKind
    flow_error: Optional[FlowError] = None
    form: Optional[FormPage] = None

    @classmethod
    def advance(cls) -> "StepOutcome":
        return cls(kind=OutcomeKind.ADVANCE)

    @classmethod
    def challenge(cls, form: FormPage, flow_error: Optional[FlowError] = None) -> "StepOutcome":
        return cls(kind=OutcomeKind.CHALLENGE, flow_error=flow_error, form=form)

    @classmethod
    def failure(cls, flow_error: FlowError, form: FormPage) -> "StepOutcome":
        return cls(kind=OutcomeKind.FAILURE, flow_error=flow_error, form=form)

    @property
    def message(self) -> Optional[str]:
        if self.form and self.form.error_args:
            return self.form.error_args[0]
        return None


class SmsAuthenticator:
    """Single-factor SMS one-time-passcode step."""

    requires_principal = True

    def __init__(
        self,
        formatter: Optional[MessageFormatter] = None,
        registry: Optional[GatewayRegistry] = None,
        clock: Optional[Clock] = None,
        store: Optional[OtpAttemptStore] = None,
        phone_attribute: str = MOBILE_NUMBER_FIELD,
    ):
        self.formatter = formatter or CatalogMessageFormatter()
        self.registry = registry or gateway_registry
        self.clock = clock or time.time
        self.store = store or OtpAttemptStore()
        self.phone_attribute = phone_attribute

    def configured_for(self, principal: Principal) -> bool:
        """False routes the flow to an alternative step."""
        return is_eligible(principal, self.phone_attribute)

    def begin(
        self,
        principal: Principal,
        config: Optional[Mapping[str, Any]],
        attempt: AuthenticationAttempt,
        locale: Optional[str] = None,
        realm: Optional[str] = None,
    ) -> StepOutcome:
        """
        Issue a code, store it on the attempt and send it by SMS.

        Returns:
            CHALLENGE with the code entry form on success, FAILURE with an
            error page when the number, configuration or delivery is bad
        """
        log = logger.bind(principal_id=principal.id)

        try:
            step_config = StepConfig.from_mapping(config)
            phone = validate_phone_number(principal.get_attribute(self.phone_attribute))

            pending = OtpIssuer(self.clock).issue(step_config)
            self.store.put(attempt, pending.code, pending.expires_at)

            text = self.formatter.render_auth_code_message(
                locale, pending.code, step_config.ttl_minutes
            )
            self._deliver(step_config, phone, text)
        except InvalidFormat as e:
            log.warning("Invalid phone number", value=mask_phone(e.value), error=e.message)
            return self._error_page(e, status_code=400)
        except SmsAuthError as e:
            log.error("SMS code not sent", error_type=type(e).__name__, error=e.message)
            return self._error_page(e, status_code=500)
        except Exception as e:
            log.exception("SMS code not sent", error_type=type(e).__name__)
            return self._error_page(DeliveryFailure(str(e)), status_code=500)

        log.info(
            "SMS code sent",
            to=mask_phone(phone),
            gateway=step_config.gateway.name,
            expires_in=step_config.ttl_seconds,
        )
        return StepOutcome.challenge(self._code_form(realm))

    def resume(
        self,
        attempt: AuthenticationAttempt,
        form: Mapping[str, Any],
        config: Optional[Mapping[str, Any]] = None,
        principal: Optional[Principal] = None,
        realm: Optional[str] = None,
    ) -> StepOutcome:
        """
        Verify the code submitted in the `code` form field.

        The attempt is kept on verification errors so the user can retry.
        The phone number re-check only runs when `principal` is passed;
        without it the check is skipped.
        """
        if principal is not None and not self.configured_for(principal):
            logger.warning("Principal no longer has a phone number", principal_id=principal.id)
            return StepOutcome.failure(
                FlowError.INVALID_USER,
                FormPage(error="smsAuthNoPhoneNumber", status_code=400),
            )

        max_attempts = 0
        if config is not None:
            try:
                max_attempts = StepConfig.from_mapping(config).max_attempts
            except SmsAuthError as e:
                logger.error("Invalid step configuration", error=e.message)
                return self._error_page(e, status_code=500)

        validator = OtpValidator(self.store, self.clock, max_attempts=max_attempts)
        try:
            validator.validate(attempt, form.get(CODE_FIELD))
        except TooManyAttempts as e:
            return StepOutcome.failure(
                e.flow_error,
                FormPage(error=e.error_key, status_code=400),
            )
        except VerificationError as e:
            form_page = self._code_form(realm)
            form_page.error = e.error_key
            return StepOutcome.challenge(form_page, flow_error=e.flow_error)
        except Exception as e:
            logger.exception("Code verification failed", error_type=type(e).__name__)
            return StepOutcome.failure(
                FlowError.INTERNAL_ERROR,
                FormPage(error=NoPendingCode.error_key, error_args=(str(e),), status_code=500),
            )

        return StepOutcome.advance()

    def _deliver(self, config: StepConfig, phone: str, text: str) -> None:
        gateway = self.registry.create(config.gateway)
        try:
            result = gateway.send(phone, text)
        except Exception as e:
            raise DeliveryFailure(str(e), provider=gateway.name) from e

        if not result.success:
            raise DeliveryFailure(
                result.error_message or "SMS could not be sent",
                provider=gateway.name,
                error_code=result.error_code,
            )

    def _code_form(self, realm: Optional[str]) -> FormPage:
        attributes = {"realm": realm} if realm is not None else {}
        return FormPage(template=TPL_CODE, attributes=attributes)

    def _error_page(self, error: SmsAuthError, status_code: int) -> StepOutcome:
        return StepOutcome.failure(
            error.flow_error,
            FormPage(
                error=error.error_key,
                error_args=(error.message,),
                status_code=status_code,
            ),
        )
