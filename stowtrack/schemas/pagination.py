from typing import TypeVar, Generic
from pydantic import BaseModel

T = TypeVar("T")


class SearchPage(BaseModel, Generic[T]):
    results: list[T]
    total_count: int
    offset: int
    limit: int
    has_more: bool
