"""
Vonage (Nexmo) SMS Gateway
==========================
Gateway for the Vonage SMS API.
"""

from typing import Optional

import httpx
import structlog

from ..config import GatewayConfig
from ..phone import mask_phone
from .base import MessageStatus, SendResult, SmsGateway

logger = structlog.get_logger(__name__)


class VonageGateway(SmsGateway):
    """Vonage SMS gateway. Options: apiKey, apiSecret and a senderId."""

    name = "vonage"
    base_url = "https://rest.nexmo.com"

    def __init__(self, config: GatewayConfig, client: Optional[httpx.Client] = None):
        super().__init__(config)
        self.api_key = config.require("apiKey")
        self.api_secret = config.require("apiSecret")
        self.sender = config.sender_id or "Vonage"
        self._client = client

    def send(self, to: str, body: str) -> SendResult:
        payload = {
            "api_key": self.api_key,
            "api_secret": self.api_secret,
            "to": to.lstrip("+"),
            "from": self.sender.lstrip("+"),
            "text": body,
            "type": "unicode" if any(ord(c) > 127 for c in body) else "text",
        }

        try:
            if self._client is not None:
                response = self._client.post(f"{self.base_url}/sms/json", data=payload)
            else:
                with httpx.Client(timeout=30.0) as client:
                    response = client.post(f"{self.base_url}/sms/json", data=payload)

            data = response.json()
            messages = data.get("messages", [])

            if messages and messages[0].get("status") == "0":
                msg = messages[0]
                logger.info("Vonage SMS accepted", to=mask_phone(to), message_id=msg.get("message-id"))
                return SendResult(
                    success=True,
                    provider_message_id=msg.get("message-id"),
                    status=MessageStatus.SENT,
                    raw_response=data,
                )

            error = messages[0] if messages else {}
            return SendResult(
                success=False,
                status=MessageStatus.REJECTED if error else MessageStatus.FAILED,
                error_code=error.get("status", str(response.status_code)),
                error_message=error.get("error-text", "Unknown error"),
                raw_response=data,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Vonage send failed", to=mask_phone(to), error=str(e))
            return SendResult(
                success=False,
                status=MessageStatus.FAILED,
                error_message=str(e),
            )
