from typing import List, Optional, Sequence, Tuple

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.domain.models.category import Category as DomainCategory
from storefront.domain.models.page import OrderSpec, PageRequest, PageResult, SearchSpec
from storefront.domain.models.product import Product as DomainProduct
from storefront.domain.models.product import ProductCategory as DomainProductCategory
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.domain.ports.services.logger import LoggerPort
from storefront.domain.services.grouping import group
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher
from storefront.infrastructure.persistence.models import Category as SQLCategory
from storefront.infrastructure.persistence.models import Product as SQLProduct
from storefront.infrastructure.persistence.models import ProductCategory as SQLProductCategory
from storefront.infrastructure.persistence.query.ordering import PRODUCT_ORDER, resolve
from storefront.infrastructure.persistence.query.pagination import paginate
from storefront.infrastructure.persistence.query.predicates import PredicateBuilder, SearchColumns

PRODUCT_SEARCH = PredicateBuilder(
    SearchColumns(
        name=SQLProduct.name,
        description=SQLProduct.description,
        nullable=frozenset({"description"}),
    ),
    prefix="product",
)

UPDATABLE_FIELDS = {"name", "price", "i18n_name", "description", "i18n_description", "store_id"}


class SQLAlchemyProductRepository(ProductRepository):
    def __init__(self, session: Session, dispatcher: BlockingDispatcher, logger: LoggerPort):
        self.session = session
        self.dispatcher = dispatcher
        self.logger = logger

    def _to_domain(self, sql_product: SQLProduct, categories: Optional[List[DomainCategory]] = None) -> DomainProduct:
        return DomainProduct(
            id=sql_product.id,
            name=sql_product.name,
            i18n_name=sql_product.i18n_name,
            price=sql_product.price,
            description=sql_product.description,
            i18n_description=sql_product.i18n_description,
            created_at=sql_product.created_at,
            store_id=sql_product.store_id,
            categories=categories or [],
        )

    @staticmethod
    def _category_to_domain(sql_category: SQLCategory) -> DomainCategory:
        return DomainCategory(id=sql_category.id, name=sql_category.name, created_at=sql_category.created_at)

    @staticmethod
    def _link_to_domain(link: SQLProductCategory) -> DomainProductCategory:
        return DomainProductCategory(id=link.id, product_id=link.product_id, category_id=link.category_id)

    def _load_categories(self, product_ids: Sequence[int]) -> List[Tuple[SQLProductCategory, SQLCategory]]:
        """Second query of the two-query fetch: every (link, category) for the given products."""
        if not product_ids:
            return []
        query = (
            select(SQLProductCategory, SQLCategory)
            .join(SQLCategory, SQLCategory.id == SQLProductCategory.category_id)
            .where(SQLProductCategory.product_id.in_(product_ids))
            .order_by(SQLProductCategory.id)
        )
        return [(link, category) for link, category in self.session.execute(query).all()]

    # blocking units, executed on the dispatcher

    def _get_by_id(self, product_id: int) -> Optional[DomainProduct]:
        with self.session.begin():
            sql_product = self.session.scalar(select(SQLProduct).where(SQLProduct.id == product_id))
            if sql_product is None:
                return None
            categories = [self._category_to_domain(category) for _, category in self._load_categories([product_id])]
            return self._to_domain(sql_product, categories)

    def _get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec],
        search: Optional[SearchSpec],
        category_id: Optional[int],
        store_id: Optional[int],
    ) -> PageResult[DomainProduct]:
        predicate = PRODUCT_SEARCH.build(search)
        base = select(SQLProduct.__table__).where(predicate.clause)
        if category_id is not None:
            base = base.where(
                SQLProduct.id.in_(
                    select(SQLProductCategory.product_id).where(SQLProductCategory.category_id == category_id)
                )
            )
        if store_id is not None:
            base = base.where(SQLProduct.store_id == store_id)

        wrapped = paginate(
            base,
            page_request.page,
            page_request.per_page,
            order=resolve(order, PRODUCT_ORDER),
            params=predicate.params,
        )

        with self.session.begin():
            rows, total = wrapped.load_and_count(self.session)
            parents = [DomainProduct(**row) for row in rows]
            joined = self._load_categories([product.id for product in parents])

        grouped = group(parents, joined, foreign_key=lambda link: link.product_id)
        products = [
            product.model_copy(update={"categories": [self._category_to_domain(c) for c in categories]})
            for product, categories in grouped
        ]
        self.logger.debug("Loaded %d of %d products (page %d)", len(products), total, page_request.page)
        return PageResult.compose(products, total, page_request)

    def _create(self, product: DomainProduct, category_id: Optional[int]) -> DomainProduct:
        with self.session.begin():
            sql_product = SQLProduct(
                name=product.name,
                price=product.price,
                i18n_name=product.i18n_name,
                description=product.description,
                i18n_description=product.i18n_description,
                store_id=product.store_id,
            )
            self.session.add(sql_product)
            self.session.flush()
            categories: List[DomainCategory] = []
            if category_id is not None:
                self.session.add(SQLProductCategory(product_id=sql_product.id, category_id=category_id))
                self.session.flush()
                categories = [self._category_to_domain(c) for _, c in self._load_categories([sql_product.id])]
            # created_at is generated by the database
            self.session.refresh(sql_product)
            return self._to_domain(sql_product, categories)

    def _update(self, product: DomainProduct) -> Optional[DomainProduct]:
        with self.session.begin():
            sql_product = self.session.scalar(select(SQLProduct).where(SQLProduct.id == product.id))
            if sql_product is None:
                return None

            # Only fields the caller set are written; omitted ones keep their stored value
            for field, value in product.model_dump(include=UPDATABLE_FIELDS, exclude_unset=True).items():
                setattr(sql_product, field, value)
            self.session.flush()
            categories = [self._category_to_domain(c) for _, c in self._load_categories([sql_product.id])]
        return self._to_domain(sql_product, categories)

    def _delete(self, product_id: int) -> Optional[DomainProduct]:
        with self.session.begin():
            sql_product = self.session.scalar(select(SQLProduct).where(SQLProduct.id == product_id))
            if sql_product is None:
                return None
            deleted = self._to_domain(sql_product)
            self.session.execute(delete(SQLProductCategory).where(SQLProductCategory.product_id == product_id))
            self.session.delete(sql_product)
        return deleted

    def _attach_category(self, product_id: int, category_id: int) -> DomainProductCategory:
        with self.session.begin():
            link = SQLProductCategory(product_id=product_id, category_id=category_id)
            self.session.add(link)
            self.session.flush()
            return self._link_to_domain(link)

    def _detach_category(self, product_id: int, category_id: int) -> Optional[DomainProductCategory]:
        with self.session.begin():
            link = self.session.scalar(
                select(SQLProductCategory).where(
                    SQLProductCategory.product_id == product_id,
                    SQLProductCategory.category_id == category_id,
                )
            )
            if link is None:
                return None
            detached = self._link_to_domain(link)
            self.session.delete(link)
        return detached

    def _attach_store(self, product_id: int, store_id: int) -> Optional[DomainProduct]:
        with self.session.begin():
            sql_product = self.session.scalar(select(SQLProduct).where(SQLProduct.id == product_id))
            if sql_product is None:
                return None
            sql_product.store_id = store_id
            self.session.flush()
        return self._to_domain(sql_product)

    # port implementation

    async def get_by_id(self, product_id: int) -> Optional[DomainProduct]:
        return await self.dispatcher.run(self._get_by_id, product_id)

    async def get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec] = None,
        search: Optional[SearchSpec] = None,
        category_id: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> PageResult[DomainProduct]:
        return await self.dispatcher.run(self._get_many, page_request, order, search, category_id, store_id)

    async def create(self, product: DomainProduct, category_id: Optional[int] = None) -> DomainProduct:
        return await self.dispatcher.run(self._create, product, category_id)

    async def update(self, product: DomainProduct) -> Optional[DomainProduct]:
        return await self.dispatcher.run(self._update, product)

    async def delete(self, product_id: int) -> Optional[DomainProduct]:
        return await self.dispatcher.run(self._delete, product_id)

    async def attach_category(self, product_id: int, category_id: int) -> DomainProductCategory:
        return await self.dispatcher.run(self._attach_category, product_id, category_id)

    async def detach_category(self, product_id: int, category_id: int) -> Optional[DomainProductCategory]:
        return await self.dispatcher.run(self._detach_category, product_id, category_id)

    async def attach_store(self, product_id: int, store_id: int) -> Optional[DomainProduct]:
        return await self.dispatcher.run(self._attach_store, product_id, store_id)
