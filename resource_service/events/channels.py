"""
Outbound event channels
Defines the contract the publisher submits envelopes to, plus the Dapr
pub/sub implementation and a logging-only channel for local runs.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx

from resource_service.core.errors import ChannelFailure
from resource_service.core.logger import logger
from resource_service.events.envelope import CloudEvent


class OutboundChannel(ABC):
    """Abstract channel with at-least-once, per-key ordered delivery"""

    @abstractmethod
    async def send(self, topic: str, key: str, envelope: CloudEvent) -> None:
        """
        Submit an envelope for delivery.

        Args:
            topic: Destination topic
            key: Partition key; events sharing a key keep their order
            envelope: The event to deliver

        Raises:
            ChannelFailure: when the broker rejects or cannot be reached
        """
        pass

    async def close(self) -> None:
        pass


class DaprOutboundChannel(OutboundChannel):
    """Publishes envelopes through the Dapr sidecar pub/sub HTTP API"""

    def __init__(
        self,
        dapr_url: str,
        pubsub_name: str,
        timeout: float = 5.0,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.dapr_url = dapr_url.rstrip("/")
        self.pubsub_name = pubsub_name
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, topic: str, key: str, envelope: CloudEvent) -> None:
        # Dapr publish endpoint: POST /v1.0/publish/{pubsubname}/{topic}
        publish_url = f"{self.dapr_url}/v1.0/publish/{self.pubsub_name}/{topic}"
        params = {
            "metadata.partitionKey": key,
            # Our envelope is delivered as-is instead of being re-wrapped by Dapr
            "metadata.rawPayload": "true",
        }
        headers = {"Content-Type": "application/cloudevents+json"}
        if envelope.correlation_id:
            headers["X-Correlation-ID"] = envelope.correlation_id

        try:
            response = await self._client.post(
                publish_url, json=envelope.to_wire(), params=params, headers=headers
            )
        except httpx.TimeoutException as e:
            raise ChannelFailure(
                f"Timeout publishing to Dapr: {e}",
                details={"topic": topic, "daprUrl": self.dapr_url},
            )
        except httpx.HTTPError as e:
            raise ChannelFailure(
                f"Cannot reach Dapr sidecar: {e}",
                details={"topic": topic, "daprUrl": self.dapr_url},
            )

        if response.status_code not in (200, 204):
            raise ChannelFailure(
                f"Dapr rejected event with status {response.status_code}",
                details={"topic": topic, "statusCode": response.status_code, "response": response.text},
            )

    async def close(self) -> None:
        await self._client.aclose()


class LoggingOutboundChannel(OutboundChannel):
    """Writes envelopes to the log; for running without a sidecar"""

    async def send(self, topic: str, key: str, envelope: CloudEvent) -> None:
        logger.info(
            f"Event {envelope.event_type} on {topic}",
            metadata={"topic": topic, "key": key, "envelope": envelope.to_wire()},
        )
