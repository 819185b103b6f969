"""
Resource Service - CRUD over a single resource type with a read cache and
CloudEvents notifications
"""

__version__ = "1.0.0"
