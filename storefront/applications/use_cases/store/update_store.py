from storefront.applications.interfaces.dtos.store import StorePublic, StoreUpdateSchema
from storefront.domain.exceptions import NotFoundError
from storefront.domain.models.store import Store, Worktime
from storefront.domain.ports.repositories.store_repository import StoreRepository


class UpdateStoreUseCase:
    def __init__(self, store_repository: StoreRepository):
        self.store_repository = store_repository

    async def execute(self, store_id: int, store_data: StoreUpdateSchema) -> StorePublic:
        store = Store(id=store_id, name=store_data.name, is_holiday=store_data.is_holiday)
        worktimes = [Worktime(store_id=store_id, **worktime.model_dump()) for worktime in store_data.worktimes]

        updated_store = await self.store_repository.update(store, worktimes)
        if not updated_store:
            raise NotFoundError(f"Store with id {store_id} not found")

        return StorePublic.model_validate(updated_store)
