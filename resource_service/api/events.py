"""
Dapr Pub/Sub Subscription Endpoints
Handles incoming events from Dapr pub/sub

Dapr interprets the response body status:
- SUCCESS: message consumed
- RETRY: redeliver (also implied by a 5xx response)
- DROP: discard, routing to the dead-letter topic when one is configured
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from resource_service.core.config import config
from resource_service.core.errors import HandlerFailure
from resource_service.core.logger import logger
from resource_service.dependencies.resource import get_event_dispatcher
from resource_service.events.dispatcher import EventDispatcher
from resource_service.events.envelope import CloudEvent

router = APIRouter(prefix="/dapr", tags=["dapr-pubsub"])

EVENTS_ROUTE = "/dapr/events/resource"


@router.get("/subscribe")
async def get_subscriptions():
    """
    Dapr calls this endpoint to get list of subscriptions.
    Returns the topics this service wants to subscribe to.
    """
    subscriptions = [
        {
            "pubsubname": config.dapr_pubsub_name,
            "topic": config.events_topic,
            "route": EVENTS_ROUTE,
            "metadata": {"rawPayload": "true"},
        },
    ]

    logger.info(
        "Dapr subscriptions configured",
        metadata={
            "subscriptionCount": len(subscriptions),
            "topics": [s["topic"] for s in subscriptions],
        },
    )
    return subscriptions


@router.post("/events/resource")
async def handle_resource_event(
    request: Request,
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """Parse the delivered envelope and dispatch it by event type"""
    try:
        body: Dict[str, Any] = await request.json()
        envelope = CloudEvent.from_wire(body)
    except (ValueError, ValidationError) as e:
        logger.error(f"Malformed event envelope: {e}", error=e)
        return {"status": "DROP"}

    logger.info(
        f"Received {envelope.event_type} event",
        envelope.correlation_id,
        metadata={"eventId": envelope.id, "source": envelope.source},
    )

    try:
        outcome = await dispatcher.on_envelope(envelope)
    except HandlerFailure as e:
        logger.warning(
            f"Event {envelope.id} failed, requesting redelivery",
            envelope.correlation_id,
            metadata={"eventId": envelope.id, "eventType": envelope.event_type, "error": e.message},
        )
        return JSONResponse(status_code=500, content={"status": "RETRY"})

    return {"status": "SUCCESS", "outcome": outcome.value}
