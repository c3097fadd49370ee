import logging
import uuid
from sqlalchemy import select, func, update as sql_update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stowtrack.exceptions import ConstraintViolationError
from stowtrack.models.item import Item
from stowtrack.search.query import SearchField, SearchQuery
from stowtrack.stores.integrity import is_foreign_key_violation
from stowtrack.stores.paging import plain_page, ranked_page

logger = logging.getLogger(__name__)

# Property values are searched, keys are not.
SEARCH_FIELDS = (
    SearchField(Item.name, "A"),
    SearchField(Item.description, "B"),
    SearchField(Item.properties, "C", is_json=True),
)


def get_by_id(db: Session, item_id: uuid.UUID) -> Item | None:
    return db.get(Item, item_id)


def get_all(db: Session) -> list[Item]:
    return list(db.scalars(select(Item).order_by(Item.name, Item.id)).all())


def get_by_location(db: Session, location_id: str) -> list[Item]:
    return list(db.scalars(
        select(Item).where(Item.location_id == location_id).order_by(Item.name, Item.id)
    ).all())


def exists(db: Session, item_id: uuid.UUID) -> bool:
    return db.scalar(select(func.count()).select_from(Item).where(Item.id == item_id)) > 0


def has_items_at(db: Session, location_id: str) -> bool:
    count = db.scalar(select(func.count()).select_from(Item).where(Item.location_id == location_id))
    return count > 0


def _commit(db: Session, location_id: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not is_foreign_key_violation(exc):
            raise
        logger.warning("Item write rejected, location %s is missing", location_id)
        raise ConstraintViolationError(f"Location with ID '{location_id}' does not exist.") from exc


def create(
    db: Session,
    *,
    name: str,
    description: str | None,
    location_id: str,
    properties: dict[str, str] | None = None,
) -> Item:
    item = Item(
        name=name,
        description=description,
        location_id=location_id,
        properties=dict(properties or {}),
    )
    db.add(item)
    _commit(db, location_id)
    db.refresh(item)
    return item


def update(
    db: Session,
    item: Item,
    *,
    name: str,
    description: str | None,
    properties: dict[str, str] | None = None,
) -> Item:
    item.name = name
    item.description = description
    item.properties = dict(properties or {})
    _commit(db, item.location_id)
    db.refresh(item)
    return item


def delete(db: Session, item_id: uuid.UUID) -> bool:
    item = db.get(Item, item_id)
    if item is None:
        return False
    db.delete(item)
    db.commit()
    return True


def move_many(db: Session, item_ids: list[uuid.UUID], new_location_id: str) -> int:
    result = db.execute(
        sql_update(Item)
        .where(Item.id.in_(item_ids))
        .values(location_id=new_location_id)
    )
    moved = result.rowcount
    _commit(db, new_location_id)
    return moved


def search_ranked(db: Session, query: SearchQuery, offset: int, limit: int) -> tuple[list[Item], int]:
    return ranked_page(db, Item, SEARCH_FIELDS, query, offset, limit)


def list_page(db: Session, offset: int, limit: int) -> tuple[list[Item], int]:
    return plain_page(db, Item, offset, limit)
