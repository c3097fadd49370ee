from typing import Callable, Sequence, TypeVar

from sqlalchemy.orm import Session

from stowtrack.exceptions import InvalidArgumentError
from stowtrack.schemas.pagination import SearchPage
from stowtrack.search.query import SearchQuery

MAX_LIMIT = 100

T = TypeVar("T")
RankedFetch = Callable[[Session, SearchQuery, int, int], tuple[Sequence[T], int]]
PlainFetch = Callable[[Session, int, int], tuple[Sequence[T], int]]


def validate_page(offset: int, limit: int) -> None:
    if offset < 0:
        raise InvalidArgumentError("Offset must be greater than or equal to zero.")
    if limit <= 0:
        raise InvalidArgumentError("Limit must be greater than zero.")
    if limit > MAX_LIMIT:
        raise InvalidArgumentError(f"Limit cannot exceed {MAX_LIMIT}.")


def search(
    db: Session,
    term: str | None,
    offset: int,
    limit: int,
    *,
    ranked: RankedFetch,
    listing: PlainFetch,
) -> SearchPage:
    """Rank rows against ``term`` and return one page plus the total match count.

    A blank term skips ranking and pages through every row by name. A term
    made only of parser operators sanitizes to nothing and matches nothing.
    """
    validate_page(offset, limit)
    if term is None or not term.strip():
        rows, total = listing(db, offset, limit)
    else:
        query = SearchQuery.parse(term)
        if query.is_empty:
            rows, total = [], 0
        else:
            rows, total = ranked(db, query, offset, limit)
    return SearchPage(
        results=list(rows),
        total_count=total,
        offset=offset,
        limit=limit,
        has_more=offset + limit < total,
    )
