from storefront.applications.interfaces.dtos.category import CategoryPublic, CategorySchema
from storefront.domain.models.category import Category
from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateCategoryUseCase:
    def __init__(self, category_repository: CategoryRepository):
        self.category_repository = category_repository

    async def execute(self, category_data: CategorySchema) -> CategoryPublic:
        created_category = await self.category_repository.create(Category(name=category_data.name))
        logger.info(f"Category created successfully: {created_category.name}")
        return CategoryPublic.model_validate(created_category)
