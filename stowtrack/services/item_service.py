import logging
import uuid
from sqlalchemy.orm import Session

from stowtrack.config import settings
from stowtrack.exceptions import InvalidArgumentError, NotFoundError
from stowtrack.models.item import Item
from stowtrack.schemas.item import ItemCreate, ItemUpdate, MoveItemsRequest
from stowtrack.schemas.pagination import SearchPage
from stowtrack.search import ranker
from stowtrack.services.validation import require_text
from stowtrack.stores import item_store, location_store

logger = logging.getLogger(__name__)

NOT_A_LEAF = (
    "Items cannot be added to the selected location because it has child locations. "
    "Please select a more specific location."
)


def _require_leaf_location(db: Session, location_id: str) -> None:
    if not location_store.exists(db, location_id):
        raise NotFoundError(f"Location with ID '{location_id}' does not exist.")
    if location_store.has_children(db, location_id):
        raise InvalidArgumentError(NOT_A_LEAF)


def get_items(db: Session) -> list[Item]:
    return item_store.get_all(db)


def get_item(db: Session, item_id: uuid.UUID) -> Item:
    item = item_store.get_by_id(db, item_id)
    if not item:
        raise NotFoundError(f"Item with ID '{item_id}' not found.")
    return item


def get_items_at_location(db: Session, location_id: str) -> list[Item]:
    if not location_store.exists(db, location_id):
        raise NotFoundError(f"Location with ID '{location_id}' not found.")
    return item_store.get_by_location(db, location_id)


def create_item(db: Session, data: ItemCreate) -> Item:
    name = require_text(data.name, "Item name")
    location_id = require_text(data.location_id, "Location ID")
    _require_leaf_location(db, location_id)

    item = item_store.create(
        db,
        name=name,
        description=data.description,
        location_id=location_id,
        properties=data.properties,
    )
    logger.info("Created item %s in %s", item.id, location_id)
    return item


def update_item(db: Session, item_id: uuid.UUID, data: ItemUpdate) -> Item:
    item = get_item(db, item_id)
    name = require_text(data.name, "Item name")
    item = item_store.update(
        db,
        item,
        name=name,
        description=data.description,
        properties=data.properties,
    )
    logger.info("Updated item %s", item_id)
    return item


def delete_item(db: Session, item_id: uuid.UUID) -> None:
    if not item_store.delete(db, item_id):
        raise NotFoundError(f"Item with ID '{item_id}' not found.")
    logger.info("Deleted item %s", item_id)


def move_items(db: Session, data: MoveItemsRequest) -> int:
    """Move a batch of items to one leaf location.

    Every precondition is checked before anything is written; one unknown
    id rejects the whole batch.
    """
    item_ids = list(dict.fromkeys(data.item_ids))
    if not item_ids:
        raise InvalidArgumentError("At least one item ID must be provided.")
    location_id = require_text(data.new_location_id, "Location ID")
    _require_leaf_location(db, location_id)

    missing = [str(item_id) for item_id in item_ids if not item_store.exists(db, item_id)]
    if missing:
        raise NotFoundError(f"Items do not exist: {', '.join(missing)}.")

    moved = item_store.move_many(db, item_ids, location_id)
    logger.info("Moved %d items to %s", moved, location_id)
    return moved


def search_items(
    db: Session,
    term: str | None,
    offset: int = 0,
    limit: int = settings.SEARCH_DEFAULT_LIMIT,
) -> SearchPage:
    return ranker.search(
        db,
        term,
        offset,
        limit,
        ranked=item_store.search_ranked,
        listing=item_store.list_page,
    )
