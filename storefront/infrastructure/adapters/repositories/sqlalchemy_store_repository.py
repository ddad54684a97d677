from typing import List, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from storefront.domain.exceptions import NotFoundError
from storefront.domain.models.page import DateRange, OrderSpec, PageRequest, PageResult, SearchSpec
from storefront.domain.models.product import Product as DomainProduct
from storefront.domain.models.store import Store as DomainStore
from storefront.domain.models.store import Worktime as DomainWorktime
from storefront.domain.ports.repositories.store_repository import StoreRepository
from storefront.domain.ports.services.logger import LoggerPort
from storefront.domain.services.grouping import group_owned
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher
from storefront.infrastructure.persistence.models import Product as SQLProduct
from storefront.infrastructure.persistence.models import Store as SQLStore
from storefront.infrastructure.persistence.models import Worktime as SQLWorktime
from storefront.infrastructure.persistence.query.ordering import STORE_ORDER, resolve
from storefront.infrastructure.persistence.query.pagination import paginate
from storefront.infrastructure.persistence.query.predicates import PredicateBuilder, SearchColumns

STORE_SEARCH = PredicateBuilder(
    SearchColumns(name=SQLStore.name, flag=SQLStore.is_holiday, created_at=SQLStore.created_at),
    prefix="store",
)

WORKTIME_FIELDS = ("day_id", "am_open", "am_close", "pm_open", "pm_close")


def _product_count():
    return (
        select(func.count(SQLProduct.id))
        .where(SQLProduct.store_id == SQLStore.id)
        .correlate(SQLStore)
        .scalar_subquery()
        .label("prod_count")
    )


class SQLAlchemyStoreRepository(StoreRepository):
    def __init__(self, session: Session, dispatcher: BlockingDispatcher, logger: LoggerPort):
        self.session = session
        self.dispatcher = dispatcher
        self.logger = logger

    @staticmethod
    def _worktime_to_domain(sql_worktime: SQLWorktime) -> DomainWorktime:
        return DomainWorktime(
            id=sql_worktime.id,
            day_id=sql_worktime.day_id,
            store_id=sql_worktime.store_id,
            am_open=sql_worktime.am_open,
            am_close=sql_worktime.am_close,
            pm_open=sql_worktime.pm_open,
            pm_close=sql_worktime.pm_close,
        )

    @staticmethod
    def _product_to_domain(sql_product: SQLProduct) -> DomainProduct:
        return DomainProduct(
            id=sql_product.id,
            name=sql_product.name,
            i18n_name=sql_product.i18n_name,
            price=sql_product.price,
            description=sql_product.description,
            i18n_description=sql_product.i18n_description,
            created_at=sql_product.created_at,
            store_id=sql_product.store_id,
        )

    def _load_worktimes(self, store_ids: Sequence[int]) -> List[DomainWorktime]:
        if not store_ids:
            return []
        query = (
            select(SQLWorktime)
            .where(SQLWorktime.store_id.in_(store_ids))
            .order_by(SQLWorktime.store_id, SQLWorktime.day_id, SQLWorktime.id)
        )
        return [self._worktime_to_domain(w) for w in self.session.scalars(query).all()]

    def _load_store(self, store_id: int) -> Optional[DomainStore]:
        row = self.session.execute(
            select(SQLStore.__table__, _product_count()).where(SQLStore.id == store_id)
        ).mappings().one_or_none()
        return DomainStore(**row) if row else None

    def _get_by_id(self, store_id: int) -> Optional[DomainStore]:
        with self.session.begin():
            store = self._load_store(store_id)
            if store is None:
                return None
            products = self.session.scalars(
                select(SQLProduct).where(SQLProduct.store_id == store_id).order_by(SQLProduct.id)
            ).all()
            return store.model_copy(
                update={
                    "worktimes": self._load_worktimes([store_id]),
                    "products": [self._product_to_domain(p) for p in products],
                }
            )

    def _get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec],
        search: Optional[SearchSpec],
        dates: Optional[DateRange],
    ) -> PageResult[DomainStore]:
        predicate = STORE_SEARCH.build(search, dates)
        wrapped = paginate(
            select(SQLStore.__table__, _product_count()).where(predicate.clause),
            page_request.page,
            page_request.per_page,
            order=resolve(order, STORE_ORDER),
            params=predicate.params,
        )

        with self.session.begin():
            rows, total = wrapped.load_and_count(self.session)
            parents = [DomainStore(**row) for row in rows]
            worktimes = self._load_worktimes([store.id for store in parents])

        stores = [
            store.model_copy(update={"worktimes": children})
            for store, children in group_owned(parents, worktimes, foreign_key=lambda w: w.store_id)
        ]
        return PageResult.compose(stores, total, page_request)

    def _create(self, store: DomainStore) -> DomainStore:
        with self.session.begin():
            sql_store = SQLStore(name=store.name, is_holiday=store.is_holiday)
            self.session.add(sql_store)
            self.session.flush()
            for worktime in store.worktimes:
                self.session.add(
                    SQLWorktime(
                        day_id=worktime.day_id,
                        store_id=sql_store.id,
                        am_open=worktime.am_open,
                        am_close=worktime.am_close,
                        pm_open=worktime.pm_open,
                        pm_close=worktime.pm_close,
                    )
                )
            self.session.flush()
            created = self._load_store(sql_store.id)
            return created.model_copy(update={"worktimes": self._load_worktimes([sql_store.id])})

    def _update(self, store: DomainStore, worktimes: List[DomainWorktime]) -> Optional[DomainStore]:
        with self.session.begin():
            sql_store = self.session.scalar(select(SQLStore).where(SQLStore.id == store.id))
            if sql_store is None:
                return None
            sql_store.name = store.name
            sql_store.is_holiday = store.is_holiday

            for worktime in worktimes:
                sql_worktime = self.session.scalar(
                    select(SQLWorktime).where(SQLWorktime.id == worktime.id, SQLWorktime.store_id == store.id)
                )
                if sql_worktime is None:
                    raise NotFoundError(f"Worktime with id {worktime.id} not found for store {store.id}")
                for name, value in worktime.model_dump(include=set(WORKTIME_FIELDS), exclude_none=True).items():
                    setattr(sql_worktime, name, value)

            self.session.flush()
            updated = self._load_store(sql_store.id)
            return updated.model_copy(update={"worktimes": self._load_worktimes([sql_store.id])})

    def _delete(self, store_id: int) -> Optional[DomainStore]:
        with self.session.begin():
            deleted = self._load_store(store_id)
            if deleted is None:
                return None
            sql_store = self.session.get(SQLStore, store_id)
            self.session.delete(sql_store)
        return deleted

    def _count_products(self, store_id: int) -> Optional[int]:
        with self.session.begin():
            if self.session.get(SQLStore, store_id) is None:
                return None
            return self.session.scalar(select(func.count(SQLProduct.id)).where(SQLProduct.store_id == store_id))

    async def get_by_id(self, store_id: int) -> Optional[DomainStore]:
        return await self.dispatcher.run(self._get_by_id, store_id)

    async def get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec] = None,
        search: Optional[SearchSpec] = None,
        dates: Optional[DateRange] = None,
    ) -> PageResult[DomainStore]:
        return await self.dispatcher.run(self._get_many, page_request, order, search, dates)

    async def create(self, store: DomainStore) -> DomainStore:
        created = await self.dispatcher.run(self._create, store)
        self.logger.info("Created store %s with %d worktimes", created.id, len(created.worktimes))
        return created

    async def update(self, store: DomainStore, worktimes: List[DomainWorktime]) -> Optional[DomainStore]:
        return await self.dispatcher.run(self._update, store, worktimes)

    async def delete(self, store_id: int) -> Optional[DomainStore]:
        return await self.dispatcher.run(self._delete, store_id)

    async def count_products(self, store_id: int) -> Optional[int]:
        return await self.dispatcher.run(self._count_products, store_id)
