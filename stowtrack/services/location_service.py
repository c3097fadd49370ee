import logging
from sqlalchemy.orm import Session

from stowtrack.config import settings
from stowtrack.exceptions import AlreadyExistsError, InvalidArgumentError, NotFoundError
from stowtrack.models.location import Location, ChildOf, parent_ref
from stowtrack.schemas.location import LocationCreate, LocationUpdate
from stowtrack.schemas.pagination import SearchPage
from stowtrack.search import ranker
from stowtrack.services.hierarchy import validate_new_parent
from stowtrack.services.tree_builder import LocationTreeNode, build_tree
from stowtrack.services.validation import require_text
from stowtrack.stores import item_store, location_store

logger = logging.getLogger(__name__)


def get_locations(db: Session) -> list[Location]:
    return location_store.get_all(db)


def get_location(db: Session, location_id: str) -> Location:
    location = location_store.get_by_id(db, location_id)
    if not location:
        raise NotFoundError(f"Location with ID '{location_id}' not found.")
    return location


def get_children(db: Session, location_id: str) -> list[Location]:
    get_location(db, location_id)
    return location_store.get_children(db, location_id)


def _check_parent(db: Session, location_id: str, parent_id: str) -> None:
    validate_new_parent(db, location_id, parent_id)
    # Items only live in leaves, so a location holding items cannot gain children.
    if item_store.has_items_at(db, parent_id):
        raise InvalidArgumentError(
            f"Location '{parent_id}' contains items and cannot hold child locations. "
            "Move its items to a more specific location first."
        )


def create_location(db: Session, data: LocationCreate) -> Location:
    location_id = require_text(data.id, "Location ID")
    name = require_text(data.name, "Location name")
    if location_store.exists(db, location_id):
        raise AlreadyExistsError(f"A location with ID '{location_id}' already exists.")

    parent = parent_ref(data.parent_location_id)
    if isinstance(parent, ChildOf):
        _check_parent(db, location_id, parent.location_id)

    location = location_store.create(
        db,
        location_id=location_id,
        name=name,
        description=data.description,
        parent=parent,
    )
    logger.info("Created location %s under %s", location.id, location.parent_location_id or "root")
    return location


def update_location(db: Session, location_id: str, data: LocationUpdate) -> Location:
    location = get_location(db, location_id)
    name = require_text(data.name, "Location name")

    parent = parent_ref(data.parent_location_id)
    if isinstance(parent, ChildOf):
        if parent.location_id == location_id:
            raise InvalidArgumentError("A location cannot be its own parent.")
        if parent != location.parent:
            _check_parent(db, location_id, parent.location_id)

    location = location_store.update(
        db,
        location,
        name=name,
        description=data.description,
        parent=parent,
    )
    logger.info("Updated location %s", location_id)
    return location


def delete_location(db: Session, location_id: str) -> None:
    if not location_store.delete(db, location_id):
        raise NotFoundError(f"Location with ID '{location_id}' not found.")
    logger.info("Deleted location %s", location_id)


def get_location_tree(db: Session) -> list[LocationTreeNode]:
    return build_tree(location_store.get_all(db))


def search_locations(
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
        ranked=location_store.search_ranked,
        listing=location_store.list_page,
    )
