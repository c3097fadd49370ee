from stowtrack.schemas.location import (
    LocationCreate, LocationUpdate, LocationResponse, LocationTreeNodeResponse,
)
from stowtrack.schemas.item import (
    ItemCreate, ItemUpdate, ItemResponse, MoveItemsRequest, MoveItemsResponse,
)
from stowtrack.schemas.pagination import SearchPage

__all__ = [
    "LocationCreate", "LocationUpdate", "LocationResponse", "LocationTreeNodeResponse",
    "ItemCreate", "ItemUpdate", "ItemResponse", "MoveItemsRequest", "MoveItemsResponse",
    "SearchPage",
]
