"""
SMS Gateway Base
================
Provider interface, send result and the name-keyed gateway registry.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

import structlog

from ..config import GatewayConfig
from ..exceptions import InvalidConfig

logger = structlog.get_logger(__name__)


class MessageStatus(str, Enum):
    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"
    REJECTED = "rejected"


@dataclass
class SendResult:
    """Result of a message send operation."""
    success: bool
    provider_message_id: Optional[str] = None
    status: MessageStatus = MessageStatus.PENDING
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    raw_response: Optional[Dict[str, Any]] = None


class SmsGateway(ABC):
    """
    Abstract base class for SMS delivery backends.

    Implementations report provider rejections and transport errors as a
    failed SendResult instead of raising.
    """

    name: str = "base"

    def __init__(self, config: GatewayConfig):
        self.config = config

    @abstractmethod
    def send(self, to: str, body: str) -> SendResult:
        """
        Send an SMS message.

        Args:
            to: Destination number, as validated by the step
            body: Message text

        Returns:
            SendResult with provider response
        """


GatewayFactory = Callable[[GatewayConfig], SmsGateway]


class GatewayRegistry:
    """Maps provider names to gateway factories."""

    def __init__(self):
        self._factories: Dict[str, GatewayFactory] = {}

    def register(self, name: str, factory: GatewayFactory) -> None:
        self._factories[name.lower()] = factory
        logger.debug("Gateway registered", provider=name)

    def create(self, config: GatewayConfig) -> SmsGateway:
        """Create the gateway selected by `config.name`."""
        factory = self._factories.get(config.name.lower())
        if factory is None:
            raise InvalidConfig(f"Unknown SMS gateway: {config.name}", key="gateway")
        return factory(config)

    def names(self) -> List[str]:
        return list(self._factories.keys())
