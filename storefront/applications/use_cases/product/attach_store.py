from storefront.applications.interfaces.dtos.product import ProductPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.domain.ports.repositories.store_repository import StoreRepository


class AttachStoreUseCase:
    def __init__(self, product_repository: ProductRepository, store_repository: StoreRepository):
        self.product_repository = product_repository
        self.store_repository = store_repository

    async def execute(self, product_id: int, store_id: int) -> ProductPublic:
        if not await self.store_repository.get_by_id(store_id):
            raise NotFoundError(f"Store with id {store_id} not found")

        product = await self.product_repository.attach_store(product_id, store_id)
        if not product:
            raise NotFoundError(f"Product with id {product_id} not found")
        return ProductPublic.model_validate(product)
