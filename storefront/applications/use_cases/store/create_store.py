from storefront.applications.interfaces.dtos.store import StorePublic, StoreSchema
from storefront.domain.models.store import Store, Worktime
from storefront.domain.ports.repositories.store_repository import StoreRepository
from storefront.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class CreateStoreUseCase:
    def __init__(self, store_repository: StoreRepository):
        self.store_repository = store_repository

    async def execute(self, store_data: StoreSchema) -> StorePublic:
        logger.info(f"Creating store: {store_data.name}")
        store = Store(
            name=store_data.name,
            is_holiday=store_data.is_holiday,
            worktimes=[Worktime(**worktime.model_dump()) for worktime in store_data.worktimes],
        )
        created_store = await self.store_repository.create(store)
        return StorePublic.model_validate(created_store)
