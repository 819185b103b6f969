"""
Event Dispatcher - routes inbound envelopes to the handler registered for
their event type.

Envelope states: Received -> Routed -> Handled | Dropped (unknown type) |
Duplicate (envelope id already handled) | Failed (HandlerFailure raised so
the inbound channel redelivers). There is no retry loop here; redelivery
belongs to the channel.
"""

import asyncio
import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional, Type, Union

from pydantic import BaseModel, ValidationError

from resource_service.core.correlation import reset_correlation_id, set_correlation_id
from resource_service.core.errors import HandlerFailure
from resource_service.core.logger import logger
from resource_service.events.envelope import CloudEvent
from resource_service.repositories.processed_events import ProcessedEventRepository

Handler = Callable[[Any], Union[None, Awaitable[None]]]


class DispatchOutcome(str, Enum):
    HANDLED = "handled"
    DROPPED = "dropped"
    DUPLICATE = "duplicate"


@dataclass(frozen=True)
class Registration:
    payload_model: Type[BaseModel]
    handler: Handler


class EventDispatcher:
    """Tagged dispatch table from event type to payload decoder + handler"""

    def __init__(self, processed_events: Optional[ProcessedEventRepository] = None):
        self.processed_events = processed_events or ProcessedEventRepository()
        self._registry: Dict[str, Registration] = {}
        # key -> [lock, number of envelopes holding or waiting on it]
        self._key_locks: Dict[str, list] = {}

    def register(self, event_type: str, payload_model: Type[BaseModel], handler: Handler) -> None:
        if event_type in self._registry:
            raise ValueError(f"Handler already registered for event type: {event_type}")
        self._registry[event_type] = Registration(payload_model, handler)
        logger.debug(f"Registered event handler for: {event_type}")

    def registered_types(self):
        return sorted(self._registry)

    async def on_envelope(self, envelope: CloudEvent, key: Optional[str] = None) -> DispatchOutcome:
        """
        Route one envelope.

        Envelopes with the same key (by default data["id"]) are processed
        one at a time in arrival order; different keys run concurrently.
        An envelope id that was already handled is skipped, so redelivery
        never replays an event over later state.

        Raises:
            HandlerFailure: payload could not be decoded or the handler failed
        """
        registration = self._registry.get(envelope.event_type)
        if registration is None:
            logger.warning(
                f"No handler registered for event type: {envelope.event_type}",
                envelope.correlation_id,
                metadata={"eventId": envelope.id, "eventType": envelope.event_type, "source": envelope.source},
            )
            return DispatchOutcome.DROPPED

        partition = key if key is not None else str(envelope.data.get("id", envelope.id))
        async with self._partition(partition):
            if await self.processed_events.is_processed(envelope.id):
                logger.info(
                    f"Duplicate delivery of event {envelope.id} ignored",
                    envelope.correlation_id,
                    metadata={"eventId": envelope.id, "eventType": envelope.event_type},
                )
                return DispatchOutcome.DUPLICATE

            token = set_correlation_id(envelope.correlation_id)
            try:
                await self._invoke(envelope, registration)
            finally:
                reset_correlation_id(token)

            await self.processed_events.mark_processed(envelope.id, envelope.event_type, partition)

        return DispatchOutcome.HANDLED

    async def _invoke(self, envelope: CloudEvent, registration: Registration) -> None:
        metadata = {"eventId": envelope.id, "eventType": envelope.event_type, "source": envelope.source}
        logger.info(f"Processing event: {envelope.event_type}", metadata=metadata)

        try:
            payload = registration.payload_model.model_validate(envelope.data)
        except ValidationError as e:
            logger.error(f"Undecodable payload for {envelope.event_type}", error=e, metadata=metadata)
            raise HandlerFailure(
                f"Failed to decode event: {envelope.id}",
                details={"eventId": envelope.id, "eventType": envelope.event_type},
            ) from e

        try:
            result = registration.handler(payload)
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            logger.error(f"Error processing event: {envelope.id}", error=e, metadata=metadata)
            raise HandlerFailure(
                f"Failed to process event: {envelope.id}",
                details={"eventId": envelope.id, "eventType": envelope.event_type},
            ) from e

        logger.info(f"Successfully processed event: {envelope.id}", metadata=metadata)

    def _partition(self, key: str) -> "_PartitionLock":
        return _PartitionLock(self._key_locks, key)


class _PartitionLock:
    """Async context manager holding the per-key lock, dropped once unused"""

    def __init__(self, locks: Dict[str, list], key: str):
        self._locks = locks
        self._key = key

    async def __aenter__(self):
        entry = self._locks.setdefault(self._key, [asyncio.Lock(), 0])
        entry[1] += 1
        try:
            await entry[0].acquire()
        except BaseException:
            self._release_ref(entry)
            raise
        return self

    async def __aexit__(self, exc_type, exc, tb):
        entry = self._locks[self._key]
        entry[0].release()
        self._release_ref(entry)
        return False

    def _release_ref(self, entry: list) -> None:
        entry[1] -= 1
        if entry[1] == 0:
            self._locks.pop(self._key, None)
