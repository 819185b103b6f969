"""
API routers
"""

from . import resources, health, events

__all__ = ["resources", "health", "events"]
