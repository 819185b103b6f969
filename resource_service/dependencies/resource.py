"""
Dependency injection for the Resource service and event collaborators

Collaborators are built once in the application lifespan and kept on
app.state; these providers hand them to the route handlers.
"""

from fastapi import Request

from resource_service.cache.resource_cache import ResourceCache
from resource_service.events.dispatcher import EventDispatcher
from resource_service.services.resource import ResourceService


def get_resource_service(request: Request) -> ResourceService:
    """Get resource service instance"""
    return request.app.state.resource_service


def get_resource_cache(request: Request) -> ResourceCache:
    return request.app.state.resource_cache


def get_event_dispatcher(request: Request) -> EventDispatcher:
    return request.app.state.event_dispatcher
