from storefront.applications.interfaces.dtos.store import StoreDetailPublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.store_repository import StoreRepository


class GetStoreUseCase:
    def __init__(self, store_repository: StoreRepository):
        self.store_repository = store_repository

    async def execute(self, store_id: int) -> StoreDetailPublic:
        store = await self.store_repository.get_by_id(store_id)
        if not store:
            raise NotFoundError(f"Store with id {store_id} not found")
        return StoreDetailPublic.model_validate(store)
