"""Query construction and scoring for ranked text search.

A search term is sanitized once and then read three ways: as an exact
phrase, as all of its words (AND) and as any of its words (OR). Each form
is ranked separately against a document built from weighted fields (the
``name`` heavy, the ``description`` light, item ``properties`` values
lighter still), and the three ranks are folded into one score by
:func:`weighted_score`.

On PostgreSQL the forms are real ``tsquery`` values ranked with
``ts_rank``. Other dialects get the same shape evaluated with
case-insensitive substring matching, which keeps development and tests on
SQLite meaningful without pretending to tokenize.
"""
import enum
import re
from dataclasses import dataclass
from typing import Any, Mapping, Sequence, TypeVar

from sqlalchemy import Float, String, and_, case, exists, func, literal, literal_column, or_, select
from sqlalchemy.sql.elements import ColumnElement

_PARSER_CHARS = re.compile(r"[&|!:()']")
_WHITESPACE = re.compile(r"\s+")
_LIKE_ESCAPE = "/"

# Defaults PostgreSQL's ts_rank uses for weights A, B and C.
FIELD_WEIGHTS = {"A": 1.0, "B": 0.4, "C": 0.2}


class QueryForm(str, enum.Enum):
    phrase = "phrase"
    all_words = "and"
    any_word = "or"

    @property
    def weight(self) -> int:
        return FORM_WEIGHTS[self]


FORM_WEIGHTS = {
    QueryForm.phrase: 3,
    QueryForm.all_words: 2,
    QueryForm.any_word: 1,
}


def sanitize_term(term: str | None) -> str:
    """Strip characters the tsquery parser treats as operators."""
    if term is None:
        return ""
    cleaned = _PARSER_CHARS.sub(" ", term.strip())
    return _WHITESPACE.sub(" ", cleaned).strip()


@dataclass(frozen=True)
class SearchQuery:
    text: str
    words: tuple[str, ...]

    @classmethod
    def parse(cls, term: str | None) -> "SearchQuery":
        text = sanitize_term(term)
        return cls(text=text, words=tuple(text.split(" ")) if text else ())

    @property
    def is_empty(self) -> bool:
        return not self.words

    def expression(self, form: QueryForm) -> str:
        if len(self.words) == 1:
            return self.words[0]
        if form is QueryForm.phrase:
            return self.text
        if form is QueryForm.all_words:
            return " & ".join(self.words)
        return " | ".join(self.words)


S = TypeVar("S")


def _sum(expressions):
    total = expressions[0]
    for expression in expressions[1:]:
        total = total + expression
    return total


def weighted_score(ranks: Mapping[QueryForm, S]) -> S:
    """3 x phrase + 2 x AND + 1 x OR.

    Works on plain floats and on SQL expressions alike, so the formula the
    database evaluates is the one the tests check.
    """
    return _sum([form.weight * ranks[form] for form in QueryForm])


@dataclass(frozen=True)
class SearchField:
    """One column of the search document and its ts_rank weight letter.

    ``is_json`` marks a string-to-string JSON object whose values, not keys,
    are searched.
    """
    column: Any
    weight: str
    is_json: bool = False

    @property
    def rank_weight(self) -> float:
        return FIELD_WEIGHTS[self.weight]


@dataclass(frozen=True)
class Ranking:
    predicate: ColumnElement
    score: ColumnElement


def build_ranking(
    query: SearchQuery,
    fields: Sequence[SearchField],
    dialect_name: str,
    text_config: str = "english",
) -> Ranking:
    if query.is_empty:
        raise ValueError("cannot rank an empty query")
    if dialect_name == "postgresql":
        parts = _tsvector_parts(query, fields, text_config)
    else:
        parts = _substring_parts(query, fields)
    predicate = or_(*(match for match, _rank in parts.values()))
    score = weighted_score({form: rank for form, (_match, rank) in parts.items()})
    return Ranking(predicate=predicate, score=score)


# --- PostgreSQL -------------------------------------------------------------

def _regconfig(text_config: str):
    return literal_column(f"'{text_config}'::regconfig")


def _field_vector(field: SearchField, config):
    if field.is_json:
        vector = func.jsonb_to_tsvector(
            config,
            func.coalesce(field.column, literal_column("'{}'::jsonb")),
            literal_column("'[\"string\"]'::jsonb"),
        )
    else:
        vector = func.to_tsvector(config, func.coalesce(field.column, literal_column("''")))
    return func.setweight(vector, literal_column(f"'{field.weight}'"))


def document_vector(fields: Sequence[SearchField], text_config: str = "english"):
    """Weighted tsvector; must stay in sync with the GIN indexes in the migration."""
    config = _regconfig(text_config)
    document = _field_vector(fields[0], config)
    for field in fields[1:]:
        document = document.op("||")(_field_vector(field, config))
    return document


def _tsvector_parts(query: SearchQuery, fields: Sequence[SearchField], text_config: str):
    config = _regconfig(text_config)
    document = document_vector(fields, text_config)
    parts = {}
    for form in QueryForm:
        parse = func.phraseto_tsquery if form is QueryForm.phrase else func.to_tsquery
        tsquery = parse(config, query.expression(form))
        parts[form] = (
            document.op("@@", is_comparison=True)(tsquery),
            func.ts_rank(document, tsquery, type_=Float),
        )
    return parts


# --- Substring fallback -----------------------------------------------------

def _escape_like(fragment: str) -> str:
    for char in (_LIKE_ESCAPE, "%", "_"):
        fragment = fragment.replace(char, _LIKE_ESCAPE + char)
    return fragment


def _lowered_contains(haystack, fragment: str):
    # Both sides go through the database's lower() so they fold the same way.
    needle = func.lower(literal(_escape_like(fragment), String), type_=String)
    return func.lower(func.coalesce(haystack, ""), type_=String).contains(needle, escape=_LIKE_ESCAPE)


def _contains(field: SearchField, fragment: str):
    if not field.is_json:
        return _lowered_contains(field.column, fragment)
    values = func.json_each(field.column).table_valued("value").alias()
    return exists(
        select(literal(1)).select_from(values).where(_lowered_contains(values.c.value, fragment))
    )


def _presence(field: SearchField, fragment: str):
    return case((_contains(field, fragment), field.rank_weight), else_=0.0)


def _word_share(words: tuple[str, ...], field: SearchField):
    return _sum([_presence(field, word) for word in words]) / len(words)


def _substring_parts(query: SearchQuery, fields: Sequence[SearchField]):
    words = query.words
    word_hits = [or_(*(_contains(field, w) for field in fields)) for w in words]
    share = _sum([_word_share(words, field) for field in fields])
    all_match = and_(*word_hits)
    return {
        QueryForm.phrase: (
            or_(*(_contains(field, query.text) for field in fields)),
            _sum([_presence(field, query.text) for field in fields]),
        ),
        QueryForm.all_words: (all_match, case((all_match, share), else_=0.0)),
        QueryForm.any_word: (or_(*word_hits), share),
    }
