"""
Schemas module initialization
"""

from .resource import (
    ResourceCreate,
    ResourceCreateRequest,
    ResourceResponse,
    ResourceEventPayload,
    CacheStatsResponse,
)

__all__ = [
    "ResourceCreate",
    "ResourceCreateRequest",
    "ResourceResponse",
    "ResourceEventPayload",
    "CacheStatsResponse",
]
