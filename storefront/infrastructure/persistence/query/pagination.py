"""Single round-trip pagination.

Any read query is wrapped as

    SELECT t.*, count(*) OVER () AS total_count
    FROM (<base query>) AS t
    [ORDER BY <order>]
    LIMIT :per_page OFFSET :offset

so the page rows and the number of rows the base query matches come back from
one execution. The window aggregate is evaluated before LIMIT/OFFSET, which is
what makes the count cover the whole filtered set.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Tuple

from sqlalchemy import Select, func, select
from sqlalchemy.orm import Session
from sqlalchemy.sql.selectable import TextualSelect

from storefront.domain.exceptions import ValidationError
from storefront.domain.models.page import PageRequest
from storefront.infrastructure.persistence.query.ordering import OrderClause

COUNT_COLUMN = "total_count"
SUBQUERY_NAME = "t"


@dataclass(frozen=True)
class WrappedQuery:
    statement: Select
    page_request: PageRequest
    params: Mapping[str, Any] = field(default_factory=dict)

    def load_and_count(self, session: Session) -> Tuple[List[Dict[str, Any]], int]:
        """Execute once; return the page rows (without the count column) and the total."""
        records = session.execute(self.statement, dict(self.params)).mappings().all()

        if not records:
            # No row to read the window count from
            return [], 0

        total = int(records[0][COUNT_COLUMN])
        rows = [{key: value for key, value in record.items() if key != COUNT_COLUMN} for record in records]
        return rows, total


def paginate(
    base_query: Select | TextualSelect,
    page: int,
    per_page: int,
    order: Optional[OrderClause] = None,
    params: Optional[Mapping[str, Any]] = None,
) -> WrappedQuery:
    """Wrap ``base_query`` so one execution yields a page plus the total count.

    ``base_query`` is treated as an opaque subquery; its selected column names
    become the keys of the returned rows. ``order`` is applied on the outer
    query, where it refers to those column names.
    """
    if page < 1 or per_page < 1:
        raise ValidationError(f"page and per_page must be >= 1, got page={page}, per_page={per_page}")

    page_request = PageRequest(page=page, per_page=per_page)
    subquery = base_query.subquery(SUBQUERY_NAME)

    statement = select(subquery, func.count().over().label(COUNT_COLUMN))
    if order is not None:
        statement = statement.order_by(order.to_sql())
    statement = statement.limit(page_request.per_page).offset(page_request.offset)

    return WrappedQuery(statement=statement, page_request=page_request, params=dict(params or {}))
