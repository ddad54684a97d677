from storefront.applications.interfaces.dtos.category import CategoryPublic, CategorySchema
from storefront.domain.exceptions import NotFoundError
from storefront.domain.models.category import Category
from storefront.domain.ports.repositories.category_repository import CategoryRepository


class UpdateCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_id: int, category_data: CategorySchema) -> CategoryPublic:
        updated_category = await self.category_repository.update(Category(id=category_id, name=category_data.name))
        if not updated_category:
            raise NotFoundError(f"Category with id {category_id} not found")
        return CategoryPublic.model_validate(updated_category)
