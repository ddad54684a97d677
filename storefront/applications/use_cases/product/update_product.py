from storefront.applications.interfaces.dtos.product import ProductPublic, ProductUpdateSchema
from storefront.domain.exceptions import NotFoundError
from storefront.domain.models.product import Product
from storefront.domain.ports.repositories.product_repository import ProductRepository


class UpdateProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: int, product_data: ProductUpdateSchema) -> ProductPublic:
        product = Product(id=product_id, **product_data.model_dump(exclude_unset=True))

        updated_product = await self.product_repository.update(product)
        if not updated_product:
            raise NotFoundError(f"Product with id {product_id} not found")

        return ProductPublic.model_validate(updated_product)
