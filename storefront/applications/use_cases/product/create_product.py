from storefront.applications.interfaces.dtos.product import ProductPublic, ProductSchema
from storefront.domain.models.product import Product
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateProductUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, product_data: ProductSchema) -> ProductPublic:
        logger.info(f"Creating product: {product_data.name}")
        product = Product(**product_data.model_dump(exclude={"category_id"}))

        created_product = await self.product_repository.create(product, category_id=product_data.category_id)

        logger.info(f"Product created successfully: {created_product.id}")
        return ProductPublic.model_validate(created_product)
