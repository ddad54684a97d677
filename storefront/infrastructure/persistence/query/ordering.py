from dataclasses import dataclass, field
from typing import Mapping, Optional

from sqlalchemy import TextClause, text

from storefront.domain.models.page import OrderSpec, SortDirection


TIEBREAKER = "id"


@dataclass(frozen=True)
class OrderClause:
    column: str
    direction: SortDirection

    @property
    def fragment(self) -> str:
        # Rows with equal sort keys keep one position across pages
        if self.column == TIEBREAKER:
            return f"{self.column} {self.direction.value}"
        return f"{self.column} {self.direction.value}, {TIEBREAKER} {self.direction.value}"

    def to_sql(self) -> TextClause:
        return text(self.fragment)


@dataclass(frozen=True)
class OrderAllowlist:
    """Sortable columns of one entity.

    ``columns`` maps the name a client may send to the column expression that
    ends up in SQL. Only the values of this mapping are ever rendered.
    """

    columns: Mapping[str, str]
    default: OrderClause = field(default=OrderClause("created_at", SortDirection.DESC))


def resolve(order_spec: Optional[OrderSpec], allowlist: OrderAllowlist) -> OrderClause:
    """Turn client ordering input into an ORDER BY clause.

    Never fails. Missing direction, missing column or a column outside the
    allowlist all give the entity's default order rather than an error.
    """
    if order_spec is None or order_spec.by is None or order_spec.order is None:
        return allowlist.default

    column = allowlist.columns.get(order_spec.by)
    if column is None:
        return allowlist.default

    return OrderClause(column, SortDirection(order_spec.order))


PRODUCT_ORDER = OrderAllowlist(
    columns={
        "id": "id",
        "name": "name",
        "description": "description",
        "price": "price",
        "created_at": "created_at",
    }
)

CATEGORY_ORDER = OrderAllowlist(columns={"id": "id", "name": "name", "created_at": "created_at"})

STORE_ORDER = OrderAllowlist(
    columns={"id": "id", "name": "name", "created_at": "created_at", "prod_count": "prod_count"}
)
