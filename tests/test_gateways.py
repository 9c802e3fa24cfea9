"""
Tests for SMS Gateways
======================
Registry lookup and provider request/response handling.
"""

import json
from urllib.parse import parse_qs

import httpx
import pytest

from sms_authenticator.config import GatewayConfig
from sms_authenticator.exceptions import InvalidConfig
from sms_authenticator.gateways import (
    GatewayRegistry,
    HttpGateway,
    MessageStatus,
    SendResult,
    SimulationGateway,
    SmsGateway,
    TwilioGateway,
    VonageGateway,
    gateway_registry,
)


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def form_data(request: httpx.Request) -> dict:
    return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


class TestRegistry:
    """Tests for gateway selection by name."""

    def test_builtin_gateways_registered(self):
        assert set(gateway_registry.names()) >= {"simulation", "twilio", "vonage", "http"}

    def test_create_simulation(self):
        gateway = gateway_registry.create(GatewayConfig(name="simulation"))
        assert isinstance(gateway, SimulationGateway)

    def test_lookup_is_case_insensitive(self):
        gateway = gateway_registry.create(GatewayConfig(name="Simulation"))
        assert isinstance(gateway, SimulationGateway)

    def test_unknown_gateway(self):
        with pytest.raises(InvalidConfig):
            gateway_registry.create(GatewayConfig(name="carrier-pigeon"))

    def test_register_custom(self):
        class RecordingGateway(SmsGateway):
            name = "recording"

            def send(self, to, body):
                return SendResult(success=True)

        registry = GatewayRegistry()
        registry.register("recording", RecordingGateway)

        gateway = registry.create(GatewayConfig(name="recording"))
        assert isinstance(gateway, RecordingGateway)
        assert registry.names() == ["recording"]

    def test_missing_credentials_fail_fast(self):
        with pytest.raises(InvalidConfig):
            gateway_registry.create(GatewayConfig(name="twilio", options={"accountSid": "AC1"}))
        with pytest.raises(InvalidConfig):
            gateway_registry.create(GatewayConfig(name="vonage", options={"apiKey": "k"}))
        with pytest.raises(InvalidConfig):
            gateway_registry.create(GatewayConfig(name="http"))


class TestSimulationGateway:
    def test_send_succeeds_without_network(self):
        result = SimulationGateway(GatewayConfig()).send("5551234567", "Your code is 123456")

        assert result.success is True
        assert result.status == MessageStatus.SENT


class TestTwilioGateway:
    """Tests for the Twilio adapter."""

    config = GatewayConfig(
        name="twilio",
        sender_id="+15550000000",
        options={"accountSid": "AC123", "authToken": "token"},
    )

    def test_send_success(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["auth"] = request.headers["Authorization"]
            seen["data"] = form_data(request)
            return httpx.Response(201, json={"sid": "SM1", "status": "queued"})

        result = TwilioGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is True
        assert result.provider_message_id == "SM1"
        assert result.status == MessageStatus.PENDING
        assert seen["url"] == "https://api.twilio.com/2010-04-01/Accounts/AC123/Messages.json"
        assert seen["auth"].startswith("Basic ")
        assert seen["data"] == {"To": "5551234567", "Body": "hello", "From": "+15550000000"}

    def test_messaging_service_replaces_from(self):
        seen = {}

        def handler(request):
            seen["data"] = form_data(request)
            return httpx.Response(201, json={"sid": "SM2", "status": "sent"})

        config = GatewayConfig(
            name="twilio",
            options={"accountSid": "AC123", "authToken": "token", "messagingServiceSid": "MG1"},
        )
        TwilioGateway(config, client=mock_client(handler)).send("5551234567", "hello")

        assert seen["data"]["MessagingServiceSid"] == "MG1"
        assert "From" not in seen["data"]

    def test_requires_sender(self):
        with pytest.raises(InvalidConfig):
            TwilioGateway(GatewayConfig(name="twilio", options={"accountSid": "AC1", "authToken": "t"}))

    def test_provider_rejection(self):
        def handler(request):
            return httpx.Response(400, json={"code": 21211, "message": "Invalid 'To' Phone Number"})

        result = TwilioGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is False
        assert result.error_code == "21211"
        assert result.error_message == "Invalid 'To' Phone Number"

    def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        result = TwilioGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is False
        assert result.status == MessageStatus.FAILED
        assert "connection refused" in result.error_message


class TestVonageGateway:
    """Tests for the Vonage adapter."""

    config = GatewayConfig(
        name="vonage",
        sender_id="Acme",
        options={"apiKey": "key", "apiSecret": "secret"},
    )

    def test_send_success(self):
        seen = {}

        def handler(request):
            seen["data"] = form_data(request)
            return httpx.Response(200, json={"messages": [{"status": "0", "message-id": "m-1"}]})

        result = VonageGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is True
        assert result.provider_message_id == "m-1"
        assert seen["data"]["from"] == "Acme"
        assert seen["data"]["type"] == "text"

    def test_unicode_body(self):
        seen = {}

        def handler(request):
            seen["data"] = form_data(request)
            return httpx.Response(200, json={"messages": [{"status": "0", "message-id": "m-2"}]})

        VonageGateway(self.config, client=mock_client(handler)).send("5551234567", "Code gültig")

        assert seen["data"]["type"] == "unicode"

    def test_rejected(self):
        def handler(request):
            return httpx.Response(
                200, json={"messages": [{"status": "2", "error-text": "Missing to param"}]}
            )

        result = VonageGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is False
        assert result.status == MessageStatus.REJECTED
        assert result.error_code == "2"
        assert result.error_message == "Missing to param"


class TestHttpGateway:
    """Tests for the generic JSON gateway."""

    config = GatewayConfig(
        name="http",
        sender_id="Acme",
        options={"endpoint": "https://sms.example.test/send", "authToken": "abc"},
    )

    def test_send_success(self):
        seen = {}

        def handler(request):
            seen["json"] = json.loads(request.content)
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(202)

        result = HttpGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is True
        assert seen["json"] == {"to": "5551234567", "message": "hello", "sender": "Acme"}
        assert seen["auth"] == "Bearer abc"

    def test_server_error(self):
        def handler(request):
            return httpx.Response(503, text="maintenance")

        result = HttpGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is False
        assert result.error_code == "503"
        assert result.error_message == "maintenance"

    def test_timeout(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        result = HttpGateway(self.config, client=mock_client(handler)).send("5551234567", "hello")

        assert result.success is False
        assert "timed out" in result.error_message
