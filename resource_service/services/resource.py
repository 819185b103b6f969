"""
Resource service containing the lifecycle business logic

Keeps the store (system of record), the read cache and the outbound event
stream consistent for create, read and delete.
"""

from typing import List

from resource_service.cache.resource_cache import ResourceCache
from resource_service.core.errors import NotFoundError, ConflictError
from resource_service.core.logger import logger
from resource_service.events.publisher import EventPublisher
from resource_service.models.resource import Resource
from resource_service.repositories.base import ResourceStore
from resource_service.schemas.resource import ResourceCreate

RESOURCE = "Resource"


class ResourceService:
    """Service layer for resource business logic"""

    def __init__(self, store: ResourceStore, cache: ResourceCache, publisher: EventPublisher):
        self.store = store
        self.cache = cache
        self.publisher = publisher

    async def get_by_id(self, resource_id: str) -> Resource:
        """Cache-aside read: the cache is only populated on a store hit"""
        cached = self.cache.get(resource_id)
        if cached is not None:
            logger.debug(
                f"Cache hit for resource {resource_id}",
                metadata={"event": "get_resource", "resource_id": resource_id, "cache": "hit"},
            )
            return cached

        token = self.cache.token()
        resource = await self.store.get_by_id(resource_id)
        if resource is None:
            raise NotFoundError(RESOURCE, "id", resource_id)

        self.cache.populate(resource_id, resource, token)
        logger.info(
            f"Fetched resource {resource_id}",
            metadata={"event": "get_resource", "resource_id": resource_id, "cache": "miss"},
        )
        return resource

    async def get_by_code(self, code: str) -> Resource:
        logger.info(f"Fetching resource with code: {code}", metadata={"event": "get_resource_by_code"})
        resource = await self.store.get_by_code(code)
        if resource is None:
            raise NotFoundError(RESOURCE, "code", code)
        return resource

    async def list_resources(self) -> List[Resource]:
        resources = await self.store.list_all()
        logger.info(
            f"Fetched {len(resources)} resources",
            metadata={"event": "list_resources", "count": len(resources)},
        )
        return resources

    async def create(self, data: ResourceCreate) -> Resource:
        """
        Create a resource with a unique code.

        The exists check and the save are not atomic; a racing writer that
        slips past the check is rejected by the store and surfaces as the
        same ConflictError.
        """
        logger.info(f"Creating resource with code: {data.code}", metadata={"event": "create_resource"})

        if await self.store.exists_by_code(data.code):
            raise ConflictError(
                f"Resource with code {data.code} already exists",
                details={"code": data.code},
            )

        resource = Resource(
            code=data.code,
            name=data.name,
            description=data.description,
            active=True,
        )
        saved = await self.store.save(resource)

        logger.info(
            f"Resource created with id: {saved.id}",
            metadata={"event": "create_resource", "resource_id": saved.id, "code": saved.code},
        )

        self.publisher.publish_resource_created(saved)
        return saved

    async def delete(self, resource_id: str) -> None:
        """Delete from the store, then evict, then announce the deletion"""
        logger.info(f"Deleting resource with id: {resource_id}", metadata={"event": "delete_resource"})

        resource = await self.store.get_by_id(resource_id)
        if resource is None:
            raise NotFoundError(RESOURCE, "id", resource_id)

        deleted = await self.store.delete(resource_id)
        # Evict even if a concurrent delete won; the entry is gone either way
        self.cache.evict(resource_id)
        if not deleted:
            raise NotFoundError(RESOURCE, "id", resource_id)

        logger.info(
            f"Resource deleted: {resource_id}",
            metadata={"event": "delete_resource", "resource_id": resource_id},
        )
        self.publisher.publish_resource_deleted(resource)
