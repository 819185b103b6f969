"""
Repository for tracking processed events to ensure idempotency
"""

import asyncio
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from resource_service.core.logger import logger


class ProcessedEventRepository:
    """
    Bounded record of handled envelope ids.

    Once more than `max_size` ids are recorded the oldest are forgotten, so a
    redelivery older than the retention window is handled again.
    """

    def __init__(self, max_size: int = 10000):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.max_size = max_size
        self._events: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        self._lock = asyncio.Lock()

    async def is_processed(self, event_id: str) -> bool:
        """
        Check if event has already been processed

        Args:
            event_id: Unique event identifier

        Returns:
            True if event was already processed, False otherwise
        """
        async with self._lock:
            return event_id in self._events

    async def mark_processed(
        self,
        event_id: str,
        event_type: str,
        resource_id: Optional[str] = None,
    ) -> bool:
        """
        Mark an event as processed

        Returns:
            True if newly marked, False if it was already recorded
        """
        async with self._lock:
            if event_id in self._events:
                logger.warning(f"Event {event_id} already processed")
                return False

            self._events[event_id] = {
                "event_type": event_type,
                "resource_id": resource_id,
                "processed_at": datetime.now(timezone.utc),
            }
            while len(self._events) > self.max_size:
                self._events.popitem(last=False)
            return True

    def __len__(self) -> int:
        return len(self._events)
