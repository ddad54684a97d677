from storefront.applications.interfaces.dtos.category import CategoryPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.category_repository import CategoryRepository


class GetCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_id: int) -> CategoryPublic:
        category = await self.category_repository.get_by_id(category_id)
        if not category:
            raise NotFoundError(f"Category with id {category_id} not found")
        return CategoryPublic.model_validate(category)
