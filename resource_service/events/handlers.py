"""
Handlers for resource lifecycle events consumed from the shared topic

Delivery is at-least-once. The dispatcher skips envelope ids it has already
handled; beyond that the directory projection only upserts or removes by
resource id, so a repeated payload is still a no-op.
"""

import threading
from typing import Dict, Optional

from resource_service.core.logger import logger
from resource_service.events.dispatcher import EventDispatcher
from resource_service.events.envelope import RESOURCE_CREATED, RESOURCE_DELETED
from resource_service.schemas.resource import ResourceEventPayload


class ResourceDirectory:
    """Read-side projection of known resources: id -> payload"""

    def __init__(self):
        self._entries: Dict[str, ResourceEventPayload] = {}
        self._lock = threading.Lock()

    def upsert(self, payload: ResourceEventPayload) -> bool:
        """Returns False when the identical entry was already present"""
        with self._lock:
            if self._entries.get(payload.id) == payload:
                return False
            self._entries[payload.id] = payload
            return True

    def remove(self, resource_id: str) -> bool:
        with self._lock:
            return self._entries.pop(resource_id, None) is not None

    def get(self, resource_id: str) -> Optional[ResourceEventPayload]:
        with self._lock:
            return self._entries.get(resource_id)

    def snapshot(self) -> Dict[str, ResourceEventPayload]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


class ResourceEventHandlers:
    """Idempotent handlers for resource.created and resource.deleted"""

    def __init__(self, directory: ResourceDirectory):
        self.directory = directory

    async def handle_resource_created(self, payload: ResourceEventPayload) -> None:
        logger.info(
            f"Handling {RESOURCE_CREATED} event",
            metadata={"resourceId": payload.id, "code": payload.code, "name": payload.name},
        )
        if not self.directory.upsert(payload):
            logger.info(
                f"Duplicate {RESOURCE_CREATED} delivery ignored",
                metadata={"resourceId": payload.id},
            )

    async def handle_resource_deleted(self, payload: ResourceEventPayload) -> None:
        logger.info(
            f"Handling {RESOURCE_DELETED} event",
            metadata={"resourceId": payload.id, "code": payload.code},
        )
        if not self.directory.remove(payload.id):
            logger.info(
                f"{RESOURCE_DELETED} for unknown or already removed resource",
                metadata={"resourceId": payload.id},
            )

    def register(self, dispatcher: EventDispatcher) -> None:
        dispatcher.register(RESOURCE_CREATED, ResourceEventPayload, self.handle_resource_created)
        dispatcher.register(RESOURCE_DELETED, ResourceEventPayload, self.handle_resource_deleted)
