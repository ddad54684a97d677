from storefront.applications.interfaces.dtos.envelope import PaginatedResult
from storefront.applications.interfaces.dtos.filter_page import FilterStores
from storefront.applications.interfaces.dtos.store import StorePublic
from storefront.domain.ports.repositories.store_repository import StoreRepository


class GetStoresUseCase:
    def __init__(self, store_repository: StoreRepository):
        self.store_repository = store_repository

    async def execute(self, filter_stores: FilterStores) -> PaginatedResult[StorePublic]:
        page = await self.store_repository.get_many(
            filter_stores.page_request(),
            order=filter_stores.order_spec(),
            search=filter_stores.search_spec(),
            dates=filter_stores.date_range(),
        )
        return PaginatedResult[StorePublic].from_page(page.map(StorePublic.model_validate))
