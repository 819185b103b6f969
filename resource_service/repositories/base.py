"""
Resource store contract shared by the MongoDB and in-memory repositories
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from resource_service.models.resource import Resource


class ResourceStore(ABC):
    """Durable keyed storage for resources with a unique constraint on code"""

    @abstractmethod
    async def get_by_id(self, resource_id: str) -> Optional[Resource]:
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[Resource]:
        pass

    @abstractmethod
    async def exists_by_code(self, code: str) -> bool:
        pass

    @abstractmethod
    async def list_all(self) -> List[Resource]:
        pass

    @abstractmethod
    async def save(self, resource: Resource) -> Resource:
        """
        Insert a new resource.

        The store assigns the id and stamps created_at/updated_at; any id on
        the input is ignored. Raises ConflictError when another stored
        resource already uses the same code.
        """
        pass

    @abstractmethod
    async def delete(self, resource_id: str) -> bool:
        """Remove a resource; returns False when nothing was deleted"""
        pass
