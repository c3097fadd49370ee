"""Store-level tests: IntegrityError translation and paging queries."""
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import IntegrityError

from stowtrack.exceptions import AlreadyExistsError, ConstraintViolationError
from stowtrack.models.location import ChildOf, Root
from stowtrack.search.query import SearchQuery
from stowtrack.stores import integrity, item_store, location_store


class FakePgError(Exception):
    def __init__(self, code, constraint):
        super().__init__(f"violates constraint {constraint}")
        self.pgcode = code
        self.diag = SimpleNamespace(constraint_name=constraint)


def _integrity_error(orig):
    return IntegrityError("DELETE FROM locations", {}, orig)


# ─── Classification ───────────────────────────────────────────────────────────

def test_postgres_foreign_key_violation():
    exc = _integrity_error(FakePgError("23503", "fk_items_location"))
    assert integrity.is_foreign_key_violation(exc)
    assert not integrity.is_unique_violation(exc)
    assert integrity.constraint_name(exc) == "fk_items_location"


def test_postgres_unique_violation():
    exc = _integrity_error(FakePgError("23505", "locations_pkey"))
    assert integrity.is_unique_violation(exc)


def test_sqlite_messages():
    fk = _integrity_error(Exception("FOREIGN KEY constraint failed"))
    unique = _integrity_error(Exception("UNIQUE constraint failed: locations.id"))
    assert integrity.is_foreign_key_violation(fk)
    assert integrity.constraint_name(fk) is None
    assert integrity.is_unique_violation(unique)


@pytest.mark.parametrize("constraint,fragment", [
    ("fk_locations_parent_location", "child locations"),
    ("fk_items_location", "contains items"),
    ("fk_something_else", "referenced by other records"),
])
def test_delete_violation_uses_constraint_name(db, constraint, fragment):
    exc = _integrity_error(FakePgError("23503", constraint))
    violation = location_store._delete_violation(db, exc, "bin")
    assert fragment in violation.message


# ─── Location writes ──────────────────────────────────────────────────────────

def _create(db, location_id, parent=Root()):
    return location_store.create(db, location_id=location_id, name=location_id, description=None, parent=parent)


def test_create_with_missing_parent_translated(db):
    with pytest.raises(ConstraintViolationError, match="Parent location does not exist"):
        _create(db, "orphan", ChildOf("ghost"))


def test_create_duplicate_translated(db):
    _create(db, "bin")
    db.expunge_all()
    with pytest.raises(AlreadyExistsError):
        _create(db, "bin")


def test_delete_probes_children(db):
    _create(db, "parent")
    _create(db, "child", ChildOf("parent"))
    with pytest.raises(ConstraintViolationError, match="child locations"):
        location_store.delete(db, "parent")


def test_delete_missing_returns_false(db):
    assert location_store.delete(db, "ghost") is False


# ─── Item writes ──────────────────────────────────────────────────────────────

def test_item_create_with_missing_location_translated(db):
    with pytest.raises(ConstraintViolationError, match="ghost"):
        item_store.create(db, name="Box", description=None, location_id="ghost")


def test_move_many_reports_rows(db):
    _create(db, "a")
    _create(db, "b")
    first = item_store.create(db, name="Saw", description=None, location_id="a")
    second = item_store.create(db, name="Axe", description=None, location_id="a")
    assert item_store.move_many(db, [first.id, second.id], "b") == 2
    assert [item.name for item in item_store.get_by_location(db, "b")] == ["Axe", "Saw"]


# ─── Paging ───────────────────────────────────────────────────────────────────

def test_ranked_page_orders_by_score_then_name(db):
    _create(db, "bin")
    for name in ("Hammer B", "Hammer A", "Saw"):
        item_store.create(db, name=name, description=None, location_id="bin")
    item_store.create(db, name="Crate", description="spare hammer", location_id="bin")

    rows, total = item_store.search_ranked(db, SearchQuery.parse("hammer"), 0, 10)
    assert total == 3
    assert [item.name for item in rows] == ["Hammer A", "Hammer B", "Crate"]


def test_list_page(db):
    for location_id in ("c", "a", "b"):
        _create(db, location_id)
    rows, total = location_store.list_page(db, 1, 1)
    assert total == 3
    assert [loc.id for loc in rows] == ["b"]
