import logging
from sqlalchemy import select, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from stowtrack.exceptions import AlreadyExistsError, ConstraintViolationError, InventoryError
from stowtrack.models.location import Location, ParentRef, ChildOf
from stowtrack.search.query import SearchField, SearchQuery
from stowtrack.stores import item_store
from stowtrack.stores.integrity import (
    ITEM_LOCATION_FK,
    PARENT_LOCATION_FK,
    constraint_name,
    is_foreign_key_violation,
    is_unique_violation,
)
from stowtrack.stores.paging import plain_page, ranked_page

logger = logging.getLogger(__name__)

SEARCH_FIELDS = (
    SearchField(Location.name, "A"),
    SearchField(Location.description, "B"),
)


def _parent_column(parent: ParentRef) -> str | None:
    if isinstance(parent, ChildOf):
        return parent.location_id
    return None


def get_by_id(db: Session, location_id: str) -> Location | None:
    return db.get(Location, location_id)


def get_all(db: Session) -> list[Location]:
    return list(db.scalars(select(Location).order_by(Location.name, Location.id)).all())


def get_children(db: Session, parent_id: str) -> list[Location]:
    return list(db.scalars(
        select(Location)
        .where(Location.parent_location_id == parent_id)
        .order_by(Location.name, Location.id)
    ).all())


def exists(db: Session, location_id: str) -> bool:
    return db.scalar(select(func.count()).select_from(Location).where(Location.id == location_id)) > 0


def has_children(db: Session, location_id: str) -> bool:
    count = db.scalar(
        select(func.count()).select_from(Location).where(Location.parent_location_id == location_id)
    )
    return count > 0


def _write_violation(exc: IntegrityError, location_id: str) -> InventoryError | None:
    if is_unique_violation(exc):
        return AlreadyExistsError(f"A location with ID '{location_id}' already exists.")
    if is_foreign_key_violation(exc):
        name = constraint_name(exc)
        if name is None or PARENT_LOCATION_FK in name:
            return ConstraintViolationError("Parent location does not exist.")
        return ConstraintViolationError("A database constraint violation occurred.")
    return None


def _commit_write(db: Session, location_id: str) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        violation = _write_violation(exc, location_id)
        if violation is None:
            raise
        logger.warning("Write to location %s rejected: %s", location_id, violation)
        raise violation from exc


def create(
    db: Session,
    *,
    location_id: str,
    name: str,
    description: str | None,
    parent: ParentRef,
) -> Location:
    location = Location(
        id=location_id,
        name=name,
        description=description,
        parent_location_id=_parent_column(parent),
    )
    db.add(location)
    _commit_write(db, location_id)
    db.refresh(location)
    return location


def update(
    db: Session,
    location: Location,
    *,
    name: str,
    description: str | None,
    parent: ParentRef,
) -> Location:
    location.name = name
    location.description = description
    location.parent_location_id = _parent_column(parent)
    _commit_write(db, location.id)
    db.refresh(location)
    return location


def _delete_violation(db: Session, exc: IntegrityError, location_id: str) -> ConstraintViolationError:
    name = constraint_name(exc)
    if name is None:
        # No constraint name from the driver: look at what still references the row.
        if has_children(db, location_id):
            name = PARENT_LOCATION_FK
        elif item_store.has_items_at(db, location_id):
            name = ITEM_LOCATION_FK
        else:
            name = ""
    if PARENT_LOCATION_FK in name:
        return ConstraintViolationError("Cannot delete location because it has child locations.")
    if ITEM_LOCATION_FK in name:
        return ConstraintViolationError("Cannot delete location because it contains items.")
    return ConstraintViolationError("Cannot delete location because it is referenced by other records.")


def delete(db: Session, location_id: str) -> bool:
    location = db.get(Location, location_id)
    if location is None:
        return False
    db.delete(location)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        if not is_foreign_key_violation(exc):
            raise
        violation = _delete_violation(db, exc, location_id)
        logger.warning("Delete of location %s rejected: %s", location_id, violation)
        raise violation from exc
    return True


def search_ranked(db: Session, query: SearchQuery, offset: int, limit: int) -> tuple[list[Location], int]:
    return ranked_page(db, Location, SEARCH_FIELDS, query, offset, limit)


def list_page(db: Session, offset: int, limit: int) -> tuple[list[Location], int]:
    return plain_page(db, Location, offset, limit)
