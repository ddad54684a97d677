from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from storefront.domain.exceptions import RepositoryError
from storefront.infrastructure.config.settings import Settings
from storefront.infrastructure.logging.std_logger_adapter import StdLoggerAdapter
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher, backend_message


class _EngineStore:
    engine: Optional[Engine] = None
    dispatcher: Optional[BlockingDispatcher] = None


def set_engine(engine: Engine, dispatcher: Optional[BlockingDispatcher] = None) -> None:
    _EngineStore.engine = engine
    if dispatcher is not None:
        _EngineStore.dispatcher = dispatcher


def get_engine() -> Engine:
    if _EngineStore.engine is None:
        settings = Settings()
        _EngineStore.engine = create_engine(
            settings.DATABASE_URL,
            echo=settings.SQL_ECHO,
            pool_size=settings.POOL_SIZE,
            max_overflow=0,
            pool_pre_ping=True,
        )
    return _EngineStore.engine


def get_dispatcher() -> BlockingDispatcher:
    if _EngineStore.dispatcher is None:
        settings = Settings()
        _EngineStore.dispatcher = BlockingDispatcher(settings.POOL_SIZE, StdLoggerAdapter(__name__))
    return _EngineStore.dispatcher


def get_session() -> Generator[Session, None, None]:
    # One pooled connection for the whole request, returned on every exit path
    try:
        connection = get_engine().connect()
    except SQLAlchemyError as e:
        raise RepositoryError(backend_message(e)) from e
    with connection:
        with Session(bind=connection, expire_on_commit=False) as session:
            yield session


def dispose_engine() -> None:
    if _EngineStore.dispatcher is not None:
        _EngineStore.dispatcher.close()
        _EngineStore.dispatcher = None
    if _EngineStore.engine is not None:
        _EngineStore.engine.dispose()
        _EngineStore.engine = None
