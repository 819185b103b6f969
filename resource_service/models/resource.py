"""
Resource domain model
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Resource(BaseModel):
    """Managed resource as held by the store and returned to callers"""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None  # assigned by the store on first save
    code: str
    name: str
    description: Optional[str] = None
    active: bool = True
    created_at: Optional[datetime] = Field(default=None, alias="createdAt")
    updated_at: Optional[datetime] = Field(default=None, alias="updatedAt")
