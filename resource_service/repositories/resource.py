"""
Resource repository for data access layer following Repository pattern
"""

from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ASCENDING, IndexModel
from pymongo.errors import DuplicateKeyError, PyMongoError

from resource_service.core.errors import ConflictError, StoreUnavailableError
from resource_service.core.logger import logger
from resource_service.models.resource import Resource
from resource_service.repositories.base import ResourceStore


def _now_ms() -> datetime:
    """Current UTC time truncated to the millisecond precision MongoDB stores"""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)


class MongoResourceRepository(ResourceStore):
    """Repository for resource data access operations"""

    def __init__(self, collection: AsyncIOMotorCollection):
        self.collection = collection
        self._indexes_created = False

    async def ensure_indexes(self):
        """Create the unique code index backing the uniqueness invariant"""
        if self._indexes_created:
            return

        indexes = [
            IndexModel([("code", ASCENDING)], unique=True, name="code_unique"),
            IndexModel([("created_at", ASCENDING)], name="created_at_idx"),
        ]
        await self.collection.create_indexes(indexes)
        self._indexes_created = True
        logger.info("Resource indexes created", metadata={"event": "indexes_created"})

    def _doc_to_model(self, doc: dict) -> Optional[Resource]:
        """Convert MongoDB document to Resource"""
        if not doc:
            return None

        doc = dict(doc)
        doc["id"] = str(doc.pop("_id"))
        return Resource(**doc)

    async def get_by_id(self, resource_id: str) -> Optional[Resource]:
        try:
            if not ObjectId.is_valid(resource_id):
                return None

            doc = await self.collection.find_one({"_id": ObjectId(resource_id)})
            return self._doc_to_model(doc)

        except PyMongoError as e:
            logger.error(f"MongoDB error getting resource: {e}")
            raise StoreUnavailableError("Database error during resource retrieval")

    async def get_by_code(self, code: str) -> Optional[Resource]:
        try:
            doc = await self.collection.find_one({"code": code})
            return self._doc_to_model(doc)

        except PyMongoError as e:
            logger.error(f"MongoDB error getting resource by code: {e}")
            raise StoreUnavailableError("Database error during resource retrieval")

    async def exists_by_code(self, code: str) -> bool:
        try:
            count = await self.collection.count_documents({"code": code}, limit=1)
            return count > 0

        except PyMongoError as e:
            logger.error(f"MongoDB error checking resource code: {e}")
            raise StoreUnavailableError("Database error during resource lookup")

    async def list_all(self) -> List[Resource]:
        try:
            cursor = self.collection.find({}).sort("created_at", ASCENDING)
            return [self._doc_to_model(doc) async for doc in cursor]

        except PyMongoError as e:
            logger.error(f"MongoDB error listing resources: {e}")
            raise StoreUnavailableError("Database error during resource listing")

    async def save(self, resource: Resource) -> Resource:
        try:
            return await self._insert(resource)

        except DuplicateKeyError:
            raise ConflictError(
                f"Resource with code {resource.code} already exists",
                details={"code": resource.code},
            )
        except PyMongoError as e:
            logger.error(f"MongoDB error saving resource: {e}")
            raise StoreUnavailableError("Database error during resource save")

    async def _insert(self, resource: Resource) -> Resource:
        now = _now_ms()
        doc = resource.model_dump(exclude={"id"})
        doc.update({"created_at": now, "updated_at": now})

        result = await self.collection.insert_one(doc)
        return resource.model_copy(update={
            "id": str(result.inserted_id),
            "created_at": now,
            "updated_at": now,
        })

    async def delete(self, resource_id: str) -> bool:
        try:
            if not ObjectId.is_valid(resource_id):
                return False

            result = await self.collection.delete_one({"_id": ObjectId(resource_id)})
            return result.deleted_count == 1

        except PyMongoError as e:
            logger.error(f"MongoDB error deleting resource: {e}")
            raise StoreUnavailableError("Database error during resource deletion")
