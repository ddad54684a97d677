from typing import List

from storefront.applications.interfaces.dtos.category import CategoryPublic, ManyIds
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.category_repository import CategoryRepository


class DeleteCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_id: int) -> CategoryPublic:
        deleted_category = await self.category_repository.delete(category_id)
        if not deleted_category:
            raise NotFoundError(f"Category with id {category_id} not found")
        return CategoryPublic.model_validate(deleted_category)


class DeleteCategoriesUseCase:
    """Deletes every listed category that exists; unknown ids are ignored."""

    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def execute(self, many_ids: ManyIds) -> List[CategoryPublic]:
        deleted = await self.category_repository.delete_many(sorted(set(many_ids.ids)))
        return [CategoryPublic.model_validate(category) for category in deleted]
