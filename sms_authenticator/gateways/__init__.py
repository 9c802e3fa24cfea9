"""
SMS Gateways
============
Delivery backends selected by name from the step configuration.
"""

from .base import GatewayRegistry, MessageStatus, SendResult, SmsGateway
from .http_gateway import HttpGateway
from .simulation import SimulationGateway
from .twilio import TwilioGateway
from .vonage import VonageGateway

# Global registry instance
gateway_registry = GatewayRegistry()
gateway_registry.register(SimulationGateway.name, SimulationGateway)
gateway_registry.register(TwilioGateway.name, TwilioGateway)
gateway_registry.register(VonageGateway.name, VonageGateway)
gateway_registry.register(HttpGateway.name, HttpGateway)

__all__ = [
    "GatewayRegistry",
    "MessageStatus",
    "SendResult",
    "SmsGateway",
    "SimulationGateway",
    "TwilioGateway",
    "VonageGateway",
    "HttpGateway",
    "gateway_registry",
]
