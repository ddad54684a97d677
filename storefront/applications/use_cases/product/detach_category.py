from storefront.applications.interfaces.dtos.product import ProductCategoryPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.product_repository import ProductRepository


class DetachCategoryUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: int, category_id: int) -> ProductCategoryPublic:
        link = await self.product_repository.detach_category(product_id, category_id)
        if not link:
            raise NotFoundError(f"Product {product_id} is not in category {category_id}")
        return ProductCategoryPublic.model_validate(link)
