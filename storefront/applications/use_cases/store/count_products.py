from storefront.applications.interfaces.dtos.store import ProductCount
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.store_repository import StoreRepository


class CountProductsUseCase:
    def __init__(self, store_repository: StoreRepository):
        self.store_repository = store_repository

    async def execute(self, store_id: int) -> ProductCount:
        count = await self.store_repository.count_products(store_id)
        if count is None:
            raise NotFoundError(f"Store with id {store_id} not found")
        return ProductCount(count=count)
