from typing import Sequence

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from stowtrack.config import settings
from stowtrack.search.query import SearchField, SearchQuery, build_ranking


def ranked_page(
    db: Session,
    model,
    fields: Sequence[SearchField],
    query: SearchQuery,
    offset: int,
    limit: int,
) -> tuple[list, int]:
    ranking = build_ranking(query, fields, db.get_bind().dialect.name, settings.SEARCH_TEXT_CONFIG)
    total = db.scalar(select(func.count()).select_from(model).where(ranking.predicate))
    rows = db.scalars(
        select(model)
        .where(ranking.predicate)
        .order_by(ranking.score.desc(), model.name, model.id)
        .offset(offset)
        .limit(limit)
    ).all()
    return list(rows), total


def plain_page(db: Session, model, offset: int, limit: int) -> tuple[list, int]:
    total = db.scalar(select(func.count()).select_from(model))
    rows = db.scalars(select(model).order_by(model.name, model.id).offset(offset).limit(limit)).all()
    return list(rows), total
