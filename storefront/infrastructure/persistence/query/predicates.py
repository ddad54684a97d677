from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, FrozenSet, List, Optional

from sqlalchemy import ColumnElement, and_, bindparam, or_, true

from storefront.domain.models.page import DateRange, SearchSpec

WILDCARD = "%"
# Open range bounds used when a date filter is absent
EARLIEST = datetime(1, 1, 1)
LATEST = datetime(9999, 12, 31, 23, 59, 59)


def contains_pattern(value: Optional[str]) -> str:
    """LIKE pattern for a substring search; absent means match anything."""
    if value is None:
        return WILDCARD
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


@dataclass(frozen=True)
class Predicate:
    clause: ColumnElement[bool]
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class SearchColumns:
    """Columns an entity exposes to search inputs.

    Columns listed in ``nullable`` still match NULL when their filter is absent.
    """

    name: Optional[ColumnElement] = None
    description: Optional[ColumnElement] = None
    flag: Optional[ColumnElement] = None
    created_at: Optional[ColumnElement] = None
    nullable: FrozenSet[str] = frozenset()


class PredicateBuilder:
    """Compiles search inputs into an AND of bound-parameter comparisons."""

    def __init__(self, columns: SearchColumns, prefix: str):
        self.columns = columns
        self.prefix = prefix

    def _key(self, name: str) -> str:
        return f"{self.prefix}_{name}"

    def _substring(self, field_name: str, column: ColumnElement, value: Optional[str]):
        key = self._key(field_name)
        clause = column.ilike(bindparam(key), escape="\\")
        if value is None and field_name in self.columns.nullable:
            clause = or_(clause, column.is_(None))
        return clause, {key: contains_pattern(value)}

    def _flag(self, column: ColumnElement, value: Optional[bool]):
        first, second = self._key("flag_a"), self._key("flag_b")
        # Absent flag: "true OR false", kept as a clause so AND-composition is unchanged
        values = (value, value) if value is not None else (False, True)
        clause = or_(column == bindparam(first), column == bindparam(second))
        return clause, {first: values[0], second: values[1]}

    def _dates(self, column: ColumnElement, dates: DateRange):
        after, before = self._key("after"), self._key("before")
        clause = column.between(bindparam(after), bindparam(before))
        return clause, {after: dates.after or EARLIEST, before: dates.before or LATEST}

    def build(self, search: Optional[SearchSpec] = None, dates: Optional[DateRange] = None) -> Predicate:
        search = search or SearchSpec()
        clauses: List[ColumnElement[bool]] = []
        params: Dict[str, Any] = {}

        parts = []
        if self.columns.name is not None:
            parts.append(self._substring("name", self.columns.name, search.name))
        if self.columns.description is not None:
            parts.append(self._substring("description", self.columns.description, search.description))
        if self.columns.flag is not None:
            parts.append(self._flag(self.columns.flag, search.in_holiday))
        if self.columns.created_at is not None:
            parts.append(self._dates(self.columns.created_at, dates or DateRange()))

        for clause, values in parts:
            clauses.append(clause)
            params.update(values)

        if not clauses:
            return Predicate(true(), params)
        return Predicate(and_(*clauses), params)
