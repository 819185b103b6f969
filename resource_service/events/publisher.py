"""
Event Publisher
Wraps domain payloads in CloudEvents and hands them to the outbound channel
without waiting for broker acknowledgement.
"""

import asyncio
from typing import Any, Dict, Optional, Set

from resource_service.core.correlation import get_correlation_id
from resource_service.core.logger import logger
from resource_service.events.channels import OutboundChannel
from resource_service.events.envelope import CloudEvent, RESOURCE_CREATED, RESOURCE_DELETED
from resource_service.models.resource import Resource
from resource_service.schemas.resource import ResourceEventPayload


class EventPublisher:
    """Fire-and-forget publisher; failures are logged, never raised"""

    def __init__(self, channel: OutboundChannel, source: str, topic: str):
        self.channel = channel
        self.source = source
        self.topic = topic
        self._pending: Set[asyncio.Task] = set()

    def publish(
        self,
        event_type: str,
        payload: Dict[str, Any],
        key: str,
        correlation_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> Optional[CloudEvent]:
        """
        Build an envelope and submit it to the channel in the background.

        Args:
            event_type: Dot-separated event name (e.g. 'resource.created')
            payload: The event data
            key: Partition key preserving per-key ordering (the resource id)
            correlation_id: Defaults to the current request's correlation id
            tenant_id: Optional tenant identifier

        Returns:
            The submitted envelope, or None if it could not be submitted
        """
        try:
            envelope = CloudEvent.build(
                event_type,
                payload,
                source=self.source,
                correlation_id=correlation_id or get_correlation_id(),
                tenant_id=tenant_id,
            )
            task = asyncio.get_running_loop().create_task(
                self.channel.send(self.topic, key, envelope)
            )
        except Exception as e:
            logger.error(
                f"Failed to submit event {event_type} to topic {self.topic}",
                error=e,
                metadata={"eventType": event_type, "topic": self.topic, "key": key},
            )
            return None

        self._pending.add(task)
        task.add_done_callback(lambda t: self._on_complete(t, envelope, key))
        return envelope

    def publish_resource_created(self, resource: Resource) -> Optional[CloudEvent]:
        payload = ResourceEventPayload.from_resource(resource)
        return self.publish(RESOURCE_CREATED, payload.model_dump(), key=resource.id)

    def publish_resource_deleted(self, resource: Resource) -> Optional[CloudEvent]:
        payload = ResourceEventPayload.from_resource(resource)
        return self.publish(RESOURCE_DELETED, payload.model_dump(), key=resource.id)

    async def drain(self) -> None:
        """Wait for every in-flight send to complete"""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def _on_complete(self, task: asyncio.Task, envelope: CloudEvent, key: str) -> None:
        self._pending.discard(task)
        metadata = {
            "eventId": envelope.id,
            "eventType": envelope.event_type,
            "topic": self.topic,
            "key": key,
        }

        if task.cancelled():
            logger.warning(f"Event send cancelled: {envelope.event_type}", envelope.correlation_id, metadata=metadata)
            return

        error = task.exception()
        if error is not None:
            logger.error(
                f"Failed to send event to topic {self.topic}: {envelope.event_type}",
                envelope.correlation_id,
                error=error,
                metadata=metadata,
            )
        else:
            logger.info(
                f"Event sent successfully to topic {self.topic}: {envelope.event_type}",
                envelope.correlation_id,
                metadata=metadata,
            )
