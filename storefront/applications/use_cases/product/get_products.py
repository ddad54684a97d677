from storefront.applications.interfaces.dtos.envelope import PaginatedResult
from storefront.applications.interfaces.dtos.filter_page import FilterProducts
from storefront.applications.interfaces.dtos.product import ProductPublic
from storefront.domain.ports.repositories.product_repository import ProductRepository


class GetProductsUseCase:
    def __init__(self, product_repository: ProductRepository):
        self.product_repository = product_repository

    async def execute(self, filter_products: FilterProducts) -> PaginatedResult[ProductPublic]:
        page = await self.product_repository.get_many(
            filter_products.page_request(),
            order=filter_products.order_spec(),
            search=filter_products.search_spec(),
            category_id=filter_products.category_id,
            store_id=filter_products.store_id,
        )
        return PaginatedResult[ProductPublic].from_page(page.map(ProductPublic.model_validate))
