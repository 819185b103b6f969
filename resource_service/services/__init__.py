"""
Services module initialization
"""

from .resource import ResourceService

__all__ = [
    "ResourceService",
]
