"""
Dependencies module initialization
"""

from .resource import get_resource_service, get_resource_cache, get_event_dispatcher

__all__ = [
    "get_resource_service",
    "get_resource_cache",
    "get_event_dispatcher",
]
