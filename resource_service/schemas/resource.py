"""
API and event schemas for Resource endpoints
"""

from typing import Optional
from pydantic import BaseModel, Field

from resource_service.models.resource import Resource


class ResourceCreate(BaseModel):
    """Input accepted by the service layer when creating a resource"""
    code: str
    name: str
    description: Optional[str] = None


class ResourceCreateRequest(ResourceCreate):
    """Request body for POST /api/resources; validated at the HTTP boundary"""
    code: str = Field(..., min_length=2, max_length=50, examples=["EXAMPLE_001"])
    name: str = Field(..., min_length=2, max_length=100, examples=["My Example"])
    description: Optional[str] = Field(None, max_length=500, examples=["This is an example"])


class ResourceResponse(Resource):
    """Schema for resource responses"""
    id: str


class ResourceEventPayload(BaseModel):
    """Payload of resource.created and resource.deleted events"""
    id: str
    code: str
    name: str

    @classmethod
    def from_resource(cls, resource: Resource) -> "ResourceEventPayload":
        return cls(id=resource.id, code=resource.code, name=resource.name)


class CacheStatsResponse(BaseModel):
    size: int
    max_size: int
    hits: int
    misses: int
    evictions: int
