"""
Step Configuration
==================
Typed view over the option mapping handed over by the flow engine.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidConfig

# Option keys as stored by the flow engine
CODE_LENGTH = "length"
CODE_TTL = "ttl"
GATEWAY = "gateway"
SIMULATION_MODE = "simulation"
SENDER_ID = "senderId"
MAX_ATTEMPTS = "maxAttempts"

DEFAULT_GATEWAY = "simulation"
MAX_CODE_LENGTH = 16

# Provider credentials and endpoints, passed through to the gateway factory
GATEWAY_OPTION_KEYS = (
    "accountSid",
    "authToken",
    "messagingServiceSid",
    "apiKey",
    "apiSecret",
    "endpoint",
)

_TRUE_VALUES = {"true", "1", "yes", "on"}
_FALSE_VALUES = {"false", "0", "no", "off", ""}


@dataclass
class GatewayConfig:
    """Configuration for an SMS gateway."""
    name: str = DEFAULT_GATEWAY
    sender_id: Optional[str] = None
    options: Dict[str, str] = field(default_factory=dict)

    def require(self, key: str) -> str:
        """Return a provider option, failing fast when it is absent."""
        value = self.options.get(key)
        if not value:
            raise InvalidConfig(f"Gateway '{self.name}' requires option '{key}'", key=key)
        return value


@dataclass
class StepConfig:
    """Configuration for one invocation of the SMS step."""
    code_length: int
    ttl_seconds: int
    gateway: GatewayConfig = field(default_factory=GatewayConfig)
    max_attempts: int = 0  # 0 disables the attempt limit

    @property
    def ttl_minutes(self) -> int:
        """Whole minutes of validity, truncated."""
        return self.ttl_seconds // 60

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "StepConfig":
        """
        Parse the flow engine's option mapping.

        Args:
            raw: String-keyed options; unrecognized keys are ignored

        Returns:
            Parsed StepConfig

        Raises:
            InvalidConfig: If a required option is missing or malformed
        """
        raw = raw or {}

        code_length = _parse_int(raw, CODE_LENGTH)
        if not 1 <= code_length <= MAX_CODE_LENGTH:
            raise InvalidConfig(
                f"'{CODE_LENGTH}' must be between 1 and {MAX_CODE_LENGTH}", key=CODE_LENGTH
            )

        ttl_seconds = _parse_int(raw, CODE_TTL)
        if ttl_seconds <= 0:
            raise InvalidConfig(f"'{CODE_TTL}' must be positive", key=CODE_TTL)

        max_attempts = _parse_int(raw, MAX_ATTEMPTS, default=0)
        if max_attempts < 0:
            raise InvalidConfig(f"'{MAX_ATTEMPTS}' must not be negative", key=MAX_ATTEMPTS)

        name = str(raw.get(GATEWAY) or DEFAULT_GATEWAY).strip().lower()
        if _parse_bool(raw, SIMULATION_MODE):
            name = "simulation"

        gateway = GatewayConfig(
            name=name,
            sender_id=raw.get(SENDER_ID) or None,
            options={k: str(raw[k]) for k in GATEWAY_OPTION_KEYS if raw.get(k)},
        )

        return cls(
            code_length=code_length,
            ttl_seconds=ttl_seconds,
            gateway=gateway,
            max_attempts=max_attempts,
        )


def _parse_int(raw: Mapping[str, Any], key: str, default: Optional[int] = None) -> int:
    value = raw.get(key)
    if value is None or str(value).strip() == "":
        if default is None:
            raise InvalidConfig(f"Missing required option '{key}'", key=key)
        return default
    try:
        return int(str(value).strip())
    except ValueError:
        raise InvalidConfig(f"Option '{key}' must be an integer, got {value!r}", key=key)


def _parse_bool(raw: Mapping[str, Any], key: str) -> bool:
    value = str(raw.get(key, "")).strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise InvalidConfig(f"Option '{key}' must be a boolean, got {value!r}", key=key)
