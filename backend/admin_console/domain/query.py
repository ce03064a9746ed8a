"""Query building shared by the console repositories."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Mapping, Optional, TypeVar

from .exceptions import ValidationError

T = TypeVar("T")

DEFAULT_LIMIT = 10
MAX_LIMIT = 100


@dataclass(slots=True)
class ListQuery:
    """Paging, free-text search and exact-match filters for a list endpoint."""

    page: int = 1
    limit: int = DEFAULT_LIMIT
    search: Optional[str] = None
    filters: dict[str, Any] = field(default_factory=dict)

    def sanitized_page(self) -> int:
        return self.page if self.page >= 1 else 1

    def sanitized_limit(self) -> int:
        if self.limit <= 0:
            return 1
        return min(self.limit, MAX_LIMIT)

    def offset(self) -> int:
        return (self.sanitized_page() - 1) * self.sanitized_limit()


class WhereBuilder:
    """Accumulates AND-combined predicates with positional ``$n`` parameters."""

    def __init__(self) -> None:
        self.clauses: list[str] = []
        self.params: list[Any] = []

    def search(self, term: Optional[str], *columns: str) -> "WhereBuilder":
        term = (term or "").strip()
        if term and columns:
            self.params.append(f"%{term}%")
            idx = len(self.params)
            self.clauses.append("(" + " OR ".join(f"{column} ILIKE ${idx}" for column in columns) + ")")
        return self

    def equals(self, column: str, value: Any) -> "WhereBuilder":
        if value is not None:
            self.params.append(value)
            self.clauses.append(f"{column} = ${len(self.params)}")
        return self

    def sql(self) -> str:
        if not self.clauses:
            return ""
        return "WHERE " + " AND ".join(self.clauses)


@dataclass(frozen=True, slots=True)
class Column:
    """An updatable column: SQL name, optional cast and value encoder."""

    name: str
    cast: Optional[str] = None
    encode: Optional[Callable[[Any], Any]] = None


def build_assignments(
    columns: Mapping[str, Column],
    changes: Mapping[str, Any],
    params: list[Any],
) -> list[str]:
    """Return ``col = $n`` assignments for the supplied changes, in column order.

    Only keys declared in ``columns`` may be written.
    """
    unknown = set(changes) - set(columns)
    if unknown:
        raise ValidationError(f"Field '{sorted(unknown)[0]}' cannot be updated")
    assignments: list[str] = []
    for key, column in columns.items():
        if key not in changes:
            continue
        value = changes[key]
        params.append(column.encode(value) if column.encode else value)
        placeholder = f"${len(params)}"
        if column.cast:
            placeholder = f"{placeholder}::{column.cast}"
        assignments.append(f"{column.name} = {placeholder}")
    return assignments


@dataclass(slots=True)
class Page(Generic[T]):
    items: list[T]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        if self.limit <= 0:
            return 0
        return math.ceil(self.total / self.limit)
