"""
Phone Utilities
===============
Destination number validation and masking.
"""

import re
from typing import Optional

from .exceptions import InvalidFormat

# Gateways get the number exactly as stored; no country code is added here.
PHONE_NUMBER_FORMAT = re.compile(r"\d{10}", re.ASCII)


def validate_phone_number(raw: Optional[str]) -> str:
    """
    Validate a destination phone number.

    Args:
        raw: Attribute value as stored on the principal

    Returns:
        The number, unchanged

    Raises:
        InvalidFormat: If the value is absent or not exactly 10 decimal digits
    """
    if raw is None:
        raise InvalidFormat("Phone number is missing")

    if not PHONE_NUMBER_FORMAT.fullmatch(raw):
        raise InvalidFormat("Phone number must be exactly 10 digits", value=raw)

    return raw


def mask_phone(phone: Optional[str]) -> str:
    """Mask all but the last four digits for logging."""
    if not phone:
        return ""
    if len(phone) <= 4:
        return "*" * len(phone)
    return "*" * (len(phone) - 4) + phone[-4:]
