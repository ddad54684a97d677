import pytest

from storefront.domain.models.page import OrderSpec, SortDirection
from storefront.infrastructure.persistence.query.ordering import (
    CATEGORY_ORDER,
    PRODUCT_ORDER,
    STORE_ORDER,
    OrderAllowlist,
    OrderClause,
    resolve,
)

DEFAULT_FRAGMENT = "created_at DESC, id DESC"


class TestResolve:
    def test_allowed_column_and_direction(self):
        clause = resolve(OrderSpec(by="price", order=SortDirection.ASC), PRODUCT_ORDER)

        assert clause == OrderClause("price", SortDirection.ASC)
        assert clause.fragment == "price ASC, id ASC"

    @pytest.mark.parametrize(
        "order_spec",
        [
            None,
            OrderSpec(),
            OrderSpec(by="price"),
            OrderSpec(order=SortDirection.ASC),
            OrderSpec(by="secret_column", order=SortDirection.ASC),
            OrderSpec(by="id; DROP TABLE products", order=SortDirection.DESC),
            OrderSpec(by="PRICE", order=SortDirection.ASC),
        ],
    )
    def test_falls_back_to_default(self, order_spec):
        clause = resolve(order_spec, PRODUCT_ORDER)

        assert clause.fragment == DEFAULT_FRAGMENT

    def test_fragment_comes_from_allowlist_values(self):
        allowlist = OrderAllowlist(columns={"newest": "created_at"})

        clause = resolve(OrderSpec(by="newest", order=SortDirection.ASC), allowlist)

        assert clause.fragment == "created_at ASC, id ASC"

    def test_entity_allowlists(self):
        by_count = resolve(OrderSpec(by="prod_count", order=SortDirection.DESC), STORE_ORDER)
        assert by_count.fragment == "prod_count DESC, id DESC"
        assert resolve(OrderSpec(by="price", order=SortDirection.ASC), STORE_ORDER).fragment == DEFAULT_FRAGMENT
        assert resolve(OrderSpec(by="name", order=SortDirection.ASC), CATEGORY_ORDER).fragment == "name ASC, id ASC"
        assert resolve(OrderSpec(by="prod_count", order=SortDirection.ASC), CATEGORY_ORDER).fragment == DEFAULT_FRAGMENT

    def test_to_sql_renders_fragment(self):
        assert str(OrderClause("name", SortDirection.DESC).to_sql()) == "name DESC, id DESC"

    def test_id_column_is_not_repeated(self):
        assert resolve(OrderSpec(by="id", order=SortDirection.ASC), PRODUCT_ORDER).fragment == "id ASC"
