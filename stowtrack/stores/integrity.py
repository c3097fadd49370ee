"""Classification of IntegrityError across drivers.

psycopg reports the SQLSTATE and the violated constraint's name; SQLite
only reports a message. Callers that need to tell two foreign keys apart
must fall back to probing when ``constraint_name`` returns None.
"""
from sqlalchemy.exc import IntegrityError

FOREIGN_KEY_VIOLATION = "23503"
UNIQUE_VIOLATION = "23505"

PARENT_LOCATION_FK = "fk_locations_parent_location"
ITEM_LOCATION_FK = "fk_items_location"


def sqlstate(exc: IntegrityError) -> str | None:
    orig = exc.orig
    return getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)


def constraint_name(exc: IntegrityError) -> str | None:
    diag = getattr(exc.orig, "diag", None)
    return getattr(diag, "constraint_name", None)


def is_foreign_key_violation(exc: IntegrityError) -> bool:
    return sqlstate(exc) == FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in str(exc.orig)


def is_unique_violation(exc: IntegrityError) -> bool:
    return sqlstate(exc) == UNIQUE_VIOLATION or "UNIQUE constraint failed" in str(exc.orig)
