import uuid
from datetime import datetime
from pydantic import BaseModel, Field


class ItemBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(None, max_length=1000)
    properties: dict[str, str] = Field(default_factory=dict)


class ItemCreate(ItemBase):
    location_id: str = Field(..., min_length=1, max_length=255)


class ItemUpdate(ItemBase):
    pass


class ItemResponse(ItemBase):
    id: uuid.UUID
    location_id: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class MoveItemsRequest(BaseModel):
    item_ids: list[uuid.UUID]
    new_location_id: str


class MoveItemsResponse(BaseModel):
    moved: int
