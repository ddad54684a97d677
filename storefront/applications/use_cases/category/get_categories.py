from storefront.applications.interfaces.dtos.category import CategoryPublic
from storefront.applications.interfaces.dtos.envelope import PaginatedResult
from storefront.applications.interfaces.dtos.filter_page import FilterCategories
from storefront.domain.ports.repositories.category_repository import CategoryRepository


class GetCategoriesUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def execute(self, filter_categories: FilterCategories) -> PaginatedResult[CategoryPublic]:
        page = await self.category_repository.get_many(
            filter_categories.page_request(),
            order=filter_categories.order_spec(),
            search=filter_categories.search_spec(),
        )
        return PaginatedResult[CategoryPublic].from_page(page.map(CategoryPublic.model_validate))
