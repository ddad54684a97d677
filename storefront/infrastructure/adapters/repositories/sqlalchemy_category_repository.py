from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from storefront.domain.models.category import Category as DomainCategory
from storefront.domain.models.page import OrderSpec, PageRequest, PageResult, SearchSpec
from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.domain.ports.services.logger import LoggerPort
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher
from storefront.infrastructure.persistence.models import Category as SQLCategory
from storefront.infrastructure.persistence.query.ordering import CATEGORY_ORDER, resolve
from storefront.infrastructure.persistence.query.pagination import paginate
from storefront.infrastructure.persistence.query.predicates import PredicateBuilder, SearchColumns

CATEGORY_SEARCH = PredicateBuilder(SearchColumns(name=SQLCategory.name), prefix="category")


class SQLAlchemyCategoryRepository(CategoryRepository):
    def __init__(self, session: Session, dispatcher: BlockingDispatcher, logger: LoggerPort):
        self.session = session
        self.dispatcher = dispatcher
        self.logger = logger

    def _to_domain(self, sql_category: SQLCategory) -> DomainCategory:
        return DomainCategory(id=sql_category.id, name=sql_category.name, created_at=sql_category.created_at)

    def _get_by_id(self, category_id: int) -> Optional[DomainCategory]:
        with self.session.begin():
            sql_category = self.session.scalar(select(SQLCategory).where(SQLCategory.id == category_id))
            return self._to_domain(sql_category) if sql_category else None

    def _get_many(
        self, page_request: PageRequest, order: Optional[OrderSpec], search: Optional[SearchSpec]
    ) -> PageResult[DomainCategory]:
        predicate = CATEGORY_SEARCH.build(search)
        wrapped = paginate(
            select(SQLCategory.__table__).where(predicate.clause),
            page_request.page,
            page_request.per_page,
            order=resolve(order, CATEGORY_ORDER),
            params=predicate.params,
        )
        with self.session.begin():
            rows, total = wrapped.load_and_count(self.session)
        return PageResult.compose([DomainCategory(**row) for row in rows], total, page_request)

    def _create(self, category: DomainCategory) -> DomainCategory:
        with self.session.begin():
            sql_category = SQLCategory(name=category.name)
            self.session.add(sql_category)
            self.session.flush()
            self.session.refresh(sql_category)
            return self._to_domain(sql_category)

    def _update(self, category: DomainCategory) -> Optional[DomainCategory]:
        with self.session.begin():
            sql_category = self.session.scalar(select(SQLCategory).where(SQLCategory.id == category.id))
            if sql_category is None:
                return None
            sql_category.name = category.name
            self.session.flush()
            return self._to_domain(sql_category)

    def _delete(self, category_id: int) -> Optional[DomainCategory]:
        with self.session.begin():
            sql_category = self.session.scalar(select(SQLCategory).where(SQLCategory.id == category_id))
            if sql_category is None:
                return None
            deleted = self._to_domain(sql_category)
            self.session.delete(sql_category)
        return deleted

    def _delete_many(self, category_ids: List[int]) -> List[DomainCategory]:
        with self.session.begin():
            sql_categories = self.session.scalars(
                select(SQLCategory).where(SQLCategory.id.in_(category_ids)).order_by(SQLCategory.id)
            ).all()
            deleted = [self._to_domain(sql_category) for sql_category in sql_categories]
            self.session.execute(delete(SQLCategory).where(SQLCategory.id.in_(category_ids)))
        return deleted

    async def get_by_id(self, category_id: int) -> Optional[DomainCategory]:
        return await self.dispatcher.run(self._get_by_id, category_id)

    async def get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec] = None,
        search: Optional[SearchSpec] = None,
    ) -> PageResult[DomainCategory]:
        return await self.dispatcher.run(self._get_many, page_request, order, search)

    async def create(self, category: DomainCategory) -> DomainCategory:
        return await self.dispatcher.run(self._create, category)

    async def update(self, category: DomainCategory) -> Optional[DomainCategory]:
        return await self.dispatcher.run(self._update, category)

    async def delete(self, category_id: int) -> Optional[DomainCategory]:
        return await self.dispatcher.run(self._delete, category_id)

    async def delete_many(self, category_ids: List[int]) -> List[DomainCategory]:
        deleted = await self.dispatcher.run(self._delete_many, category_ids)
        self.logger.info("Deleted %d of %d requested categories", len(deleted), len(category_ids))
        return deleted
