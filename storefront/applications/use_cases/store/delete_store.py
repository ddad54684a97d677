from storefront.applications.interfaces.dtos.store import StorePublic
from storefront.domain.exceptions import NotFoundError
from storefront.domain.ports.repositories.store_repository import StoreRepository
from storefront.infrastructure.logging.logger import Logger

logger = Logger.get_logger(__name__)


class DeleteStoreUseCase:
    def __init__(self, store_repository: StoreRepository):
        self.store_repository = store_repository

    async def execute(self, store_id: int) -> StorePublic:
        deleted_store = await self.store_repository.delete(store_id)
        if not deleted_store:
            raise NotFoundError(f"Store with id {store_id} not found")

        logger.info(f"Store '{deleted_store.name}' deleted")
        return StorePublic.model_validate(deleted_store)
