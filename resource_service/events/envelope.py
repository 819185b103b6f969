"""
CloudEvents-shaped envelope used for both outbound and inbound messages

Wire format:
{
    "eventType": "resource.created",
    "specversion": "1.0",
    "source": "resource-service",
    "id": "unique-event-id",
    "time": "2025-11-04T10:00:00Z",
    "datacontenttype": "application/json",
    "data": { ... },
    "correlationid": "optional-correlation-id",
    "tenantid": "optional-tenant-id"
}
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

SPEC_VERSION = "1.0"
DATA_CONTENT_TYPE = "application/json"

RESOURCE_CREATED = "resource.created"
RESOURCE_DELETED = "resource.deleted"


class CloudEvent(BaseModel):
    """Envelope wrapping a typed payload with event metadata"""

    model_config = ConfigDict(populate_by_name=True)

    # Inbound messages may use the standard CloudEvents "type" attribute
    event_type: str = Field(
        validation_alias=AliasChoices("eventType", "type", "event_type"),
        serialization_alias="eventType",
    )
    spec_version: str = Field(
        default=SPEC_VERSION,
        validation_alias=AliasChoices("specversion", "spec_version"),
        serialization_alias="specversion",
    )
    source: str
    id: str
    time: datetime
    data_content_type: str = Field(
        default=DATA_CONTENT_TYPE,
        validation_alias=AliasChoices("datacontenttype", "data_content_type"),
        serialization_alias="datacontenttype",
    )
    data: Dict[str, Any] = Field(default_factory=dict)
    correlation_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("correlationid", "correlationId", "correlation_id"),
        serialization_alias="correlationid",
    )
    tenant_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("tenantid", "tenantId", "tenant_id"),
        serialization_alias="tenantid",
    )

    @property
    def type(self) -> str:
        return self.event_type

    @classmethod
    def build(
        cls,
        event_type: str,
        data: Dict[str, Any],
        source: str,
        correlation_id: Optional[str] = None,
        tenant_id: Optional[str] = None,
    ) -> "CloudEvent":
        """Create a new envelope with a fresh id and timestamp"""
        return cls(
            event_type=event_type,
            source=source,
            id=str(uuid.uuid4()),
            time=datetime.now(timezone.utc),
            data=data,
            correlation_id=correlation_id,
            tenant_id=tenant_id,
        )

    @classmethod
    def from_wire(cls, body: Dict[str, Any]) -> "CloudEvent":
        return cls.model_validate(body)

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
