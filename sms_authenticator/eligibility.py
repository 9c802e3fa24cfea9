"""
Step Eligibility
================
Decides whether the SMS step applies to a principal.
"""

import structlog

from .models import MOBILE_NUMBER_FIELD, Principal

logger = structlog.get_logger(__name__)


def is_eligible(principal: Principal, attribute: str = MOBILE_NUMBER_FIELD) -> bool:
    """
    True when the principal has a non-empty phone number attribute.

    Only presence is checked; the format is validated when the code is sent.
    When False, the flow engine falls through to an alternative step.
    """
    value = principal.get_attribute(attribute)
    eligible = isinstance(value, str) and value != ""

    if not eligible:
        logger.debug("Principal has no phone number", principal_id=principal.id, attribute=attribute)

    return eligible
