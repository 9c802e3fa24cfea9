"""
Twilio SMS Gateway
==================
Gateway for the Twilio Messages API.
"""

from base64 import b64encode
from typing import Optional

import httpx
import structlog

from ..config import GatewayConfig
from ..phone import mask_phone
from .base import MessageStatus, SendResult, SmsGateway

logger = structlog.get_logger(__name__)


class TwilioGateway(SmsGateway):
    """
    Twilio SMS gateway.

    Options: accountSid, authToken, and either messagingServiceSid or a
    senderId used as the From number.
    """

    name = "twilio"

    def __init__(self, config: GatewayConfig, client: Optional[httpx.Client] = None):
        super().__init__(config)
        self.account_sid = config.require("accountSid")
        self.auth_token = config.require("authToken")
        self.messaging_service_sid = config.options.get("messagingServiceSid")
        if not self.messaging_service_sid and not config.sender_id:
            config.require("messagingServiceSid")
        self.base_url = f"https://api.twilio.com/2010-04-01/Accounts/{self.account_sid}"
        self._client = client

    def _headers(self):
        auth = b64encode(f"{self.account_sid}:{self.auth_token}".encode()).decode()
        return {"Authorization": f"Basic {auth}"}

    def send(self, to: str, body: str) -> SendResult:
        payload = {
            "To": to,
            "Body": body,
        }

        if self.messaging_service_sid:
            payload["MessagingServiceSid"] = self.messaging_service_sid
        else:
            payload["From"] = self.config.sender_id

        try:
            if self._client is not None:
                response = self._post(self._client, payload)
            else:
                with httpx.Client(timeout=30.0) as client:
                    response = self._post(client, payload)

            data = response.json()
            if response.status_code == 201:
                logger.info("Twilio SMS accepted", to=mask_phone(to), sid=data.get("sid"))
                return SendResult(
                    success=True,
                    provider_message_id=data.get("sid"),
                    status=self._map_status(data.get("status", "")),
                    raw_response=data,
                )

            return SendResult(
                success=False,
                status=MessageStatus.FAILED,
                error_code=str(data.get("code", response.status_code)),
                error_message=data.get("message", "Unknown error"),
                raw_response=data,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Twilio send failed", to=mask_phone(to), error=str(e))
            return SendResult(
                success=False,
                status=MessageStatus.FAILED,
                error_message=str(e),
            )

    def _post(self, client: httpx.Client, payload) -> httpx.Response:
        return client.post(
            f"{self.base_url}/Messages.json",
            data=payload,
            headers=self._headers(),
        )

    def _map_status(self, twilio_status: str) -> MessageStatus:
        mapping = {
            "queued": MessageStatus.PENDING,
            "accepted": MessageStatus.PENDING,
            "sending": MessageStatus.PENDING,
            "sent": MessageStatus.SENT,
            "delivered": MessageStatus.DELIVERED,
            "undelivered": MessageStatus.FAILED,
            "failed": MessageStatus.FAILED,
        }
        return mapping.get(twilio_status.lower(), MessageStatus.PENDING)
