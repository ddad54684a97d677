from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.domain.ports.repositories.store_repository import StoreRepository
from storefront.domain.ports.services.logger import LoggerPort
from storefront.infrastructure.adapters.repositories.sqlalchemy_category_repository import (
    SQLAlchemyCategoryRepository,
)
from storefront.infrastructure.adapters.repositories.sqlalchemy_product_repository import (
    SQLAlchemyProductRepository,
)
from storefront.infrastructure.adapters.repositories.sqlalchemy_store_repository import (
    SQLAlchemyStoreRepository,
)
from storefront.infrastructure.logging.std_logger_adapter import StdLoggerAdapter
from storefront.infrastructure.persistence.database import get_dispatcher, get_session
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher

SessionDep = Annotated[Session, Depends(get_session)]
DispatcherDep = Annotated[BlockingDispatcher, Depends(get_dispatcher)]


def get_logger() -> LoggerPort:
    return StdLoggerAdapter(__name__)


def get_product_repository(
    session: SessionDep,
    dispatcher: DispatcherDep,
    logger: Annotated[LoggerPort, Depends(get_logger)],
) -> ProductRepository:
    return SQLAlchemyProductRepository(session, dispatcher, logger)


def get_category_repository(
    session: SessionDep,
    dispatcher: DispatcherDep,
    logger: Annotated[LoggerPort, Depends(get_logger)],
) -> CategoryRepository:
    return SQLAlchemyCategoryRepository(session, dispatcher, logger)


def get_store_repository(
    session: SessionDep,
    dispatcher: DispatcherDep,
    logger: Annotated[LoggerPort, Depends(get_logger)],
) -> StoreRepository:
    return SQLAlchemyStoreRepository(session, dispatcher, logger)
