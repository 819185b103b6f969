"""Shared test fixtures"""
import os

import pytest

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("LOG_LEVEL", "DEBUG")

from resource_service.cache.resource_cache import ResourceCache
from resource_service.events.publisher import EventPublisher
from resource_service.repositories.memory import InMemoryResourceStore
from resource_service.schemas.resource import ResourceCreate
from resource_service.services.resource import ResourceService

from tests.doubles import RecordingChannel


@pytest.fixture
def store():
    return InMemoryResourceStore()


@pytest.fixture
def cache():
    return ResourceCache(max_size=16)


@pytest.fixture
def channel():
    return RecordingChannel()


@pytest.fixture
def publisher(channel):
    return EventPublisher(channel, source="resource-service", topic="resource.events")


@pytest.fixture
def resource_service(store, cache, publisher):
    return ResourceService(store, cache, publisher)


@pytest.fixture
def create_request():
    return ResourceCreate(code="X1", name="N")
