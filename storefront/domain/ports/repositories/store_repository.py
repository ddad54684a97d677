from abc import ABC, abstractmethod
from typing import List, Optional

from storefront.domain.models.page import DateRange, OrderSpec, PageRequest, PageResult, SearchSpec
from storefront.domain.models.store import Store, Worktime


class StoreRepository(ABC):
    @abstractmethod
    async def get_by_id(self, store_id: int) -> Optional[Store]:
        pass

    @abstractmethod
    async def get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec] = None,
        search: Optional[SearchSpec] = None,
        dates: Optional[DateRange] = None,
    ) -> PageResult[Store]:
        pass

    @abstractmethod
    async def create(self, store: Store) -> Store:
        pass

    @abstractmethod
    async def update(self, store: Store, worktimes: List[Worktime]) -> Optional[Store]:
        pass

    @abstractmethod
    async def delete(self, store_id: int) -> Optional[Store]:
        pass

    @abstractmethod
    async def count_products(self, store_id: int) -> Optional[int]:
        pass
