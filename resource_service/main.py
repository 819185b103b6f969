"""
FastAPI Application - Resource Service
Following FastAPI best practices with proper separation of concerns
"""

# Load environment variables from .env file FIRST before any other imports
from dotenv import load_dotenv
load_dotenv()

from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from fastapi.exceptions import RequestValidationError

from resource_service.api import events, health, resources
from resource_service.cache.resource_cache import ResourceCache
from resource_service.core.config import Config, config
from resource_service.core.errors import (
    ErrorResponse,
    error_response_handler,
    http_exception_handler,
    unhandled_exception_handler,
    validation_exception_handler,
)
from resource_service.core.logger import logger
from resource_service.core.telemetry import instrument_app
from resource_service.db.mongodb import Database
from resource_service.events.channels import DaprOutboundChannel, LoggingOutboundChannel, OutboundChannel
from resource_service.events.dispatcher import EventDispatcher
from resource_service.events.handlers import ResourceDirectory, ResourceEventHandlers
from resource_service.events.publisher import EventPublisher
from resource_service.middleware import CorrelationIdMiddleware
from resource_service.repositories.base import ResourceStore
from resource_service.repositories.memory import InMemoryResourceStore
from resource_service.repositories.processed_events import ProcessedEventRepository
from resource_service.repositories.resource import MongoResourceRepository
from resource_service.services.resource import ResourceService


def build_channel(settings: Config) -> OutboundChannel:
    if settings.event_channel == "log":
        return LoggingOutboundChannel()
    if settings.event_channel == "dapr":
        return DaprOutboundChannel(
            settings.dapr_url,
            settings.dapr_pubsub_name,
            timeout=settings.publish_timeout,
        )
    raise ValueError(f"Unsupported event channel: {settings.event_channel}. Supported: dapr, log")


def create_app(
    settings: Optional[Config] = None,
    store: Optional[ResourceStore] = None,
    channel: Optional[OutboundChannel] = None,
) -> FastAPI:
    """
    Build the application. Collaborators not passed in are created from
    settings when the application starts.
    """
    settings = settings or config

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting Resource Service...")

        database = None
        resource_store = store
        if resource_store is None:
            if settings.store_backend == "memory":
                resource_store = InMemoryResourceStore()
            elif settings.store_backend == "mongodb":
                database = Database(settings)
                await database.connect()
                resource_store = MongoResourceRepository(database.resource_collection())
                await resource_store.ensure_indexes()
            else:
                raise ValueError(f"Unsupported store backend: {settings.store_backend}")

        outbound = channel or build_channel(settings)
        cache = ResourceCache(max_size=settings.cache_max_size)
        publisher = EventPublisher(outbound, source=settings.service_name, topic=settings.events_topic)

        dispatcher = EventDispatcher(ProcessedEventRepository(max_size=settings.processed_events_max_size))
        directory = ResourceDirectory()
        ResourceEventHandlers(directory).register(dispatcher)

        app.state.resource_cache = cache
        app.state.event_publisher = publisher
        app.state.event_dispatcher = dispatcher
        app.state.resource_directory = directory
        app.state.resource_service = ResourceService(resource_store, cache, publisher)

        logger.info(
            "Resource Service started successfully",
            metadata={
                "service_name": settings.service_name,
                "version": settings.service_version,
                "environment": settings.environment,
                "store_backend": type(resource_store).__name__,
                "event_channel": type(outbound).__name__,
                "handled_events": dispatcher.registered_types(),
            },
        )

        yield

        logger.info("Shutting down Resource Service...")
        await publisher.drain()
        if channel is None:
            await outbound.close()
        if database is not None:
            await database.close()

    app = FastAPI(
        title="Resource Service",
        description=settings.service_description,
        version=settings.service_version,
        lifespan=lifespan,
    )

    app.add_middleware(CorrelationIdMiddleware)

    app.add_exception_handler(ErrorResponse, error_response_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(resources.router, prefix="/api/resources", tags=["resources"])
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(events.router)

    instrument_app(app)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "resource_service.main:app",
        host=config.host,
        port=config.port,
        reload=config.environment == "development",
    )
