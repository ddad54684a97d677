from storefront.applications.interfaces.dtos.product import ProductPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.product_repository import ProductRepository


class GetProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: int) -> ProductPublic:
        product = await self.product_repository.get_by_id(product_id)
        if not product:
            raise NotFoundError(f"Product with id {product_id} not found")
        return ProductPublic.model_validate(product)
