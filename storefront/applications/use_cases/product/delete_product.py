from storefront.applications.interfaces.dtos.product import ProductPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class DeleteProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_id: int) -> ProductPublic:
        deleted_product = await self.product_repository.delete(product_id)
        if not deleted_product:
            raise NotFoundError(f"Product with id {product_id} not found")

        logger.info(f"Product '{deleted_product.name}' deleted")
        return ProductPublic.model_validate(deleted_product)
