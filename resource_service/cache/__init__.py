"""
Cache module initialization
"""

from .resource_cache import ResourceCache

__all__ = ["ResourceCache"]
