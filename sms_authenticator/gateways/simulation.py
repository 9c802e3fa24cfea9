"""
Simulation Gateway
==================
Logs messages instead of sending them. For development and test realms.
"""

import structlog

from ..phone import mask_phone
from .base import MessageStatus, SendResult, SmsGateway

logger = structlog.get_logger(__name__)


class SimulationGateway(SmsGateway):
    name = "simulation"

    def send(self, to: str, body: str) -> SendResult:
        logger.warning(
            "***** SIMULATION MODE ***** Would send SMS",
            to=mask_phone(to),
            sender=self.config.sender_id,
            text=body,
        )
        return SendResult(success=True, status=MessageStatus.SENT)
