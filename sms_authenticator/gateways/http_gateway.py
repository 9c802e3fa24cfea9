"""
Generic HTTP Gateway
====================
Posts {"to", "message", "sender"} as JSON to a configured endpoint.
"""

from typing import Dict, Optional

import httpx
import structlog

from ..config import GatewayConfig
from ..phone import mask_phone
from .base import MessageStatus, SendResult, SmsGateway

logger = structlog.get_logger(__name__)


class HttpGateway(SmsGateway):
    """Options: endpoint (required), authToken (sent as a bearer token)."""

    name = "http"

    def __init__(self, config: GatewayConfig, client: Optional[httpx.Client] = None):
        super().__init__(config)
        self.url = config.require("endpoint")
        self.auth_token = config.options.get("authToken")
        self._client = client

    def send(self, to: str, body: str) -> SendResult:
        payload = {"to": to, "message": body}
        if self.config.sender_id:
            payload["sender"] = self.config.sender_id

        headers: Dict[str, str] = {"Content-Type": "application/json"}
        if self.auth_token:
            headers["Authorization"] = f"Bearer {self.auth_token}"

        try:
            if self._client is not None:
                response = self._client.post(self.url, json=payload, headers=headers)
            else:
                with httpx.Client(timeout=30.0) as client:
                    response = client.post(self.url, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("HTTP gateway send failed", to=mask_phone(to), error=str(e))
            return SendResult(success=False, status=MessageStatus.FAILED, error_message=str(e))

        if response.is_success:
            logger.info("HTTP gateway accepted SMS", to=mask_phone(to), status_code=response.status_code)
            return SendResult(success=True, status=MessageStatus.SENT)

        return SendResult(
            success=False,
            status=MessageStatus.FAILED,
            error_code=str(response.status_code),
            error_message=response.text[:200] or f"HTTP {response.status_code}",
        )
