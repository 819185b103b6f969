"""
Event publishing and consumption
"""

from .envelope import CloudEvent, RESOURCE_CREATED, RESOURCE_DELETED
from .channels import OutboundChannel, DaprOutboundChannel, LoggingOutboundChannel
from .publisher import EventPublisher
from .dispatcher import EventDispatcher, DispatchOutcome
from .handlers import ResourceDirectory, ResourceEventHandlers

__all__ = [
    # Envelope
    "CloudEvent",
    "RESOURCE_CREATED",
    "RESOURCE_DELETED",
    # Publishing
    "OutboundChannel",
    "DaprOutboundChannel",
    "LoggingOutboundChannel",
    "EventPublisher",
    # Consumption
    "EventDispatcher",
    "DispatchOutcome",
    "ResourceDirectory",
    "ResourceEventHandlers",
]
