from abc import ABC, abstractmethod
from typing import List, Optional

from storefront.domain.models.category import Category
from storefront.domain.models.page import OrderSpec, PageRequest, PageResult, SearchSpec


class CategoryRepository(ABC):
    @abstractmethod
    async def get_by_id(self, category_id: int) -> Optional[Category]:
        pass

    @abstractmethod
    async def get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec] = None,
        search: Optional[SearchSpec] = None,
    ) -> PageResult[Category]:
        pass

    @abstractmethod
    async def create(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def update(self, category: Category) -> Optional[Category]:
        pass

    @abstractmethod
    async def delete(self, category_id: int) -> Optional[Category]:
        pass

    @abstractmethod
    async def delete_many(self, category_ids: List[int]) -> List[Category]:
        pass
