"""
Models module initialization
"""

from .resource import Resource

__all__ = [
    "Resource",
]
