"""
In-process resource store used for local development and tests
"""

import asyncio
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional

from resource_service.core.errors import ConflictError
from resource_service.models.resource import Resource
from resource_service.repositories.base import ResourceStore


class InMemoryResourceStore(ResourceStore):
    """Dict-backed store that enforces code uniqueness at save time"""

    def __init__(self):
        self._resources: Dict[str, Resource] = {}
        self._lock = asyncio.Lock()

    async def get_by_id(self, resource_id: str) -> Optional[Resource]:
        resource = self._resources.get(resource_id)
        return resource.model_copy() if resource else None

    async def get_by_code(self, code: str) -> Optional[Resource]:
        for resource in self._resources.values():
            if resource.code == code:
                return resource.model_copy()
        return None

    async def exists_by_code(self, code: str) -> bool:
        return any(r.code == code for r in self._resources.values())

    async def list_all(self) -> List[Resource]:
        return [r.model_copy() for r in self._resources.values()]

    async def save(self, resource: Resource) -> Resource:
        async with self._lock:
            for existing in self._resources.values():
                if existing.code == resource.code:
                    raise ConflictError(
                        f"Resource with code {resource.code} already exists",
                        details={"code": resource.code},
                    )

            now = datetime.now(timezone.utc)
            stored = resource.model_copy(update={
                "id": str(uuid.uuid4()),
                "created_at": now,
                "updated_at": now,
            })
            self._resources[stored.id] = stored
            return stored.model_copy()

    async def delete(self, resource_id: str) -> bool:
        async with self._lock:
            return self._resources.pop(resource_id, None) is not None
