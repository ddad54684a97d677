from storefront.applications.interfaces.dtos.product import ProductCategoryPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.domain.ports.repositories.product_repository import ProductRepository


class AttachCategoryUseCase:
    def __init__(self, product_repository: ProductRepository, category_repository: CategoryRepository):
        self.product_repository = product_repository
        self.category_repository = category_repository

    async def execute(self, product_id: int, category_id: int) -> ProductCategoryPublic:
        if not await self.product_repository.get_by_id(product_id):
            raise NotFoundError(f"Product with id {product_id} not found")
        if not await self.category_repository.get_by_id(category_id):
            raise NotFoundError(f"Category with id {category_id} not found")

        link = await self.product_repository.attach_category(product_id, category_id)
        return ProductCategoryPublic.model_validate(link)
