import logging
from sqlalchemy.orm import Session

from stowtrack.exceptions import CycleDetectedError, InvalidArgumentError, NotFoundError
from stowtrack.models.location import ChildOf, parent_ref
from stowtrack.stores import location_store

logger = logging.getLogger(__name__)


def validate_new_parent(db: Session, child_id: str, proposed_parent_id: str) -> None:
    """Raise unless ``proposed_parent_id`` may become the parent of ``child_id``.

    Walks the parent chain upward from the proposed parent, one store lookup
    per level. Reaching ``child_id`` means the move would close a loop.
    Revisiting any other node means the stored data already loops; the walk
    stops there and lets the write through rather than spin forever.
    Read-only: nothing is locked, so a concurrent reparent can still race
    past this check and is left to the database constraints.
    """
    if proposed_parent_id == child_id:
        raise InvalidArgumentError("A location cannot be its own parent.")
    if not location_store.exists(db, proposed_parent_id):
        raise NotFoundError(f"Parent location with ID '{proposed_parent_id}' does not exist.")

    visited: set[str] = set()
    current = parent_ref(proposed_parent_id)
    while isinstance(current, ChildOf):
        ancestor_id = current.location_id
        if ancestor_id == child_id:
            raise CycleDetectedError(
                f"Setting '{proposed_parent_id}' as parent of '{child_id}' would create a circular reference."
            )
        if ancestor_id in visited:
            logger.warning("Location hierarchy already loops at %s, stopping walk", ancestor_id)
            return
        visited.add(ancestor_id)
        ancestor = location_store.get_by_id(db, ancestor_id)
        if ancestor is None:
            return
        current = ancestor.parent
