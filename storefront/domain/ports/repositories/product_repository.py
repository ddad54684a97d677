from abc import ABC, abstractmethod
from typing import Optional

from storefront.domain.models.page import OrderSpec, PageRequest, PageResult, SearchSpec
from storefront.domain.models.product import Product, ProductCategory


class ProductRepository(ABC):
    @abstractmethod
    async def get_by_id(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def get_many(
        self,
        page_request: PageRequest,
        order: Optional[OrderSpec] = None,
        search: Optional[SearchSpec] = None,
        category_id: Optional[int] = None,
        store_id: Optional[int] = None,
    ) -> PageResult[Product]:
        pass

    @abstractmethod
    async def create(self, product: Product, category_id: Optional[int] = None) -> Product:
        pass

    @abstractmethod
    async def update(self, product: Product) -> Optional[Product]:
        pass

    @abstractmethod
    async def delete(self, product_id: int) -> Optional[Product]:
        pass

    @abstractmethod
    async def attach_category(self, product_id: int, category_id: int) -> ProductCategory:
        pass

    @abstractmethod
    async def detach_category(self, product_id: int, category_id: int) -> Optional[ProductCategory]:
        pass

    @abstractmethod
    async def attach_store(self, product_id: int, store_id: int) -> Optional[Product]:
        pass
