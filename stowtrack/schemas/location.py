from datetime import datetime
from pydantic import BaseModel, Field


class LocationBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    parent_location_id: str | None = Field(None, max_length=255)


class LocationCreate(LocationBase):
    id: str = Field(..., min_length=1, max_length=255)


class LocationUpdate(LocationBase):
    """Full replacement: omitting parent_location_id makes the location a root."""


class LocationResponse(LocationBase):
    id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LocationTreeNodeResponse(BaseModel):
    location: LocationResponse
    children: list["LocationTreeNodeResponse"] = []

    model_config = {"from_attributes": True}
