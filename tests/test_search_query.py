import pytest
from sqlalchemy import column, select
from sqlalchemy.dialects import postgresql, sqlite

from stowtrack.models.item import Item
from stowtrack.models.location import Location
from stowtrack.search.query import (
    QueryForm,
    SearchQuery,
    build_ranking,
    sanitize_term,
    weighted_score,
)
from stowtrack.stores import item_store, location_store


# ─── Sanitizing ───────────────────────────────────────────────────────────────

def test_sanitize_strips_parser_operators():
    assert sanitize_term("  red & (hammer) | 'big':! ") == "red hammer big"


def test_sanitize_collapses_whitespace():
    assert sanitize_term("red \t\n  hammer") == "red hammer"


def test_sanitize_none():
    assert sanitize_term(None) == ""


def test_operator_only_term_is_empty():
    assert SearchQuery.parse("&| !()").is_empty


# ─── Query forms ──────────────────────────────────────────────────────────────

def test_multiword_forms():
    query = SearchQuery.parse("Red Hammer")
    assert query.words == ("Red", "Hammer")
    assert query.expression(QueryForm.phrase) == "Red Hammer"
    assert query.expression(QueryForm.all_words) == "Red & Hammer"
    assert query.expression(QueryForm.any_word) == "Red | Hammer"


def test_single_word_collapses_to_one_form():
    query = SearchQuery.parse("  hammer ")
    for form in QueryForm:
        assert query.expression(form) == "hammer"


# ─── Scoring ──────────────────────────────────────────────────────────────────

def test_weighted_score_formula():
    ranks = {QueryForm.phrase: 1.0, QueryForm.all_words: 0.5, QueryForm.any_word: 0.25}
    assert weighted_score(ranks) == pytest.approx(4.25)


def test_full_match_outscores_or_only_match():
    rank = 0.3
    full = weighted_score({form: rank for form in QueryForm})
    or_only = weighted_score({QueryForm.phrase: 0.0, QueryForm.all_words: 0.0, QueryForm.any_word: rank})
    assert full > or_only


def test_weighted_score_on_sql_expressions():
    expr = weighted_score({
        QueryForm.phrase: column("p"),
        QueryForm.all_words: column("a"),
        QueryForm.any_word: column("o"),
    })
    sql = str(expr.compile(compile_kwargs={"literal_binds": True}))
    assert "3 * p" in sql
    assert "2 * a" in sql
    assert "1 * o" in sql


# ─── Dialect rendering ────────────────────────────────────────────────────────

def _compile(model, fields, dialect_name, dialect, term="red hammer"):
    ranking = build_ranking(SearchQuery.parse(term), fields, dialect_name, "english")
    stmt = select(model.id).where(ranking.predicate).order_by(ranking.score.desc())
    return str(stmt.compile(dialect=dialect))


def test_postgres_ranking_uses_tsquery():
    sql = _compile(Location, location_store.SEARCH_FIELDS, "postgresql", postgresql.dialect())
    assert "phraseto_tsquery" in sql
    assert "to_tsquery" in sql
    assert "ts_rank" in sql
    assert "@@" in sql
    assert "setweight" in sql
    assert "'english'::regconfig" in sql
    assert "jsonb_to_tsvector" not in sql


def test_postgres_item_document_includes_property_values():
    sql = _compile(Item, item_store.SEARCH_FIELDS, "postgresql", postgresql.dialect())
    assert "jsonb_to_tsvector" in sql
    assert "'[\"string\"]'::jsonb" in sql
    assert "'C'" in sql


def test_other_dialects_use_substring_matching():
    sql = _compile(Location, location_store.SEARCH_FIELDS, "sqlite", sqlite.dialect())
    assert "LIKE" in sql
    assert "lower(" in sql
    assert "tsquery" not in sql


def test_substring_item_search_reads_property_values():
    sql = _compile(Item, item_store.SEARCH_FIELDS, "sqlite", sqlite.dialect())
    assert "json_each" in sql
    assert "EXISTS" in sql


def test_empty_query_cannot_be_ranked():
    with pytest.raises(ValueError):
        build_ranking(SearchQuery.parse("  "), location_store.SEARCH_FIELDS, "sqlite")
