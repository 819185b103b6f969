"""
Repositories module initialization
"""

from .base import ResourceStore
from .memory import InMemoryResourceStore
from .processed_events import ProcessedEventRepository
from .resource import MongoResourceRepository

__all__ = [
    "ResourceStore",
    "InMemoryResourceStore",
    "ProcessedEventRepository",
    "MongoResourceRepository",
]
