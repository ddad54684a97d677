import os
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Iterable, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool
from testcontainers.postgres import PostgresContainer

from storefront.app import app
from storefront.domain.ports.repositories.category_repository import CategoryRepository
from storefront.domain.ports.repositories.product_repository import ProductRepository
from storefront.domain.ports.repositories.store_repository import StoreRepository
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
from storefront.infrastructure.persistence.models import Category, Product, ProductCategory, Store, Worktime
from storefront.infrastructure.persistence.models import table_registry

USE_POSTGRES = os.getenv("STOREFRONT_TEST_POSTGRES") == "1"


def _sqlite_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


@pytest.fixture
def engine():
    """Database engine with the schema created; Postgres when STOREFRONT_TEST_POSTGRES=1"""
    if USE_POSTGRES:
        with PostgresContainer("postgres:16", driver="psycopg") as postgres:
            engine = create_engine(postgres.get_connection_url())
            table_registry.metadata.create_all(engine)
            yield engine
            table_registry.metadata.drop_all(engine)
            engine.dispose()
        return

    engine = _sqlite_engine()
    table_registry.metadata.create_all(engine)
    yield engine
    table_registry.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session(engine):
    """One connection for the whole test, as a request would hold it"""
    with engine.connect() as connection:
        with Session(bind=connection, expire_on_commit=False) as session:
            yield session


@pytest.fixture
def dispatcher():
    return BlockingDispatcher(max_workers=4, logger=StdLoggerAdapter("tests.dispatcher"))


@pytest.fixture
def statements(engine):
    """Records every SQL statement sent through the engine"""
    executed: List[str] = []

    def record(conn, cursor, statement, parameters, context, executemany):
        executed.append(statement)

    event.listen(engine, "before_cursor_execute", record)
    yield executed
    event.remove(engine, "before_cursor_execute", record)


class Seeder:
    """Inserts rows directly through the ORM with distinct, increasing created_at values"""

    def __init__(self, session: Session):
        self.session = session
        self._clock = datetime(2024, 1, 1, 12, 0, 0)

    def _tick(self, created_at: Optional[datetime]) -> datetime:
        if created_at is not None:
            return created_at
        self._clock += timedelta(minutes=1)
        return self._clock

    def _insert(self, row, created_at: Optional[datetime] = None) -> int:
        if hasattr(row, "created_at"):
            row.created_at = self._tick(created_at)
        with self.session.begin():
            self.session.add(row)
            self.session.flush()
            row_id = row.id
        # Repositories must read seeded rows from the database, not the identity map
        self.session.expunge(row)
        return row_id

    def category(self, name: str, created_at: Optional[datetime] = None) -> int:
        return self._insert(Category(name=name), created_at)

    def store(
        self,
        name: str,
        is_holiday: bool = False,
        created_at: Optional[datetime] = None,
        days: Iterable[int] = (),
    ) -> int:
        store_id = self._insert(Store(name=name, is_holiday=is_holiday), created_at)
        for day_id in days:
            self._insert(Worktime(day_id=day_id, store_id=store_id, am_open="08:00", am_close="12:00"))
        return store_id

    def product(
        self,
        name: str,
        price: str = "10.00",
        description: Optional[str] = None,
        store_id: Optional[int] = None,
        categories: Iterable[int] = (),
        created_at: Optional[datetime] = None,
    ) -> int:
        product_id = self._insert(
            Product(name=name, price=Decimal(price), description=description, store_id=store_id), created_at
        )
        for category_id in categories:
            self._insert(ProductCategory(product_id=product_id, category_id=category_id))
        return product_id


@pytest.fixture
def seed(session):
    return Seeder(session)


@pytest.fixture
def product_repository(session, dispatcher):
    return SQLAlchemyProductRepository(session, dispatcher, StdLoggerAdapter("tests.products"))


@pytest.fixture
def category_repository(session, dispatcher):
    return SQLAlchemyCategoryRepository(session, dispatcher, StdLoggerAdapter("tests.categories"))


@pytest.fixture
def store_repository(session, dispatcher):
    return SQLAlchemyStoreRepository(session, dispatcher, StdLoggerAdapter("tests.stores"))


@pytest.fixture
def mock_product_repository():
    return AsyncMock(spec=ProductRepository)


@pytest.fixture
def mock_category_repository():
    return AsyncMock(spec=CategoryRepository)


@pytest.fixture
def mock_store_repository():
    return AsyncMock(spec=StoreRepository)


@pytest_asyncio.fixture
async def client(session, dispatcher):
    """HTTP client bound to the test connection and dispatcher"""

    def override_get_session():
        yield session

    app.dependency_overrides[get_session] = override_get_session
    app.dependency_overrides[get_dispatcher] = lambda: dispatcher

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
