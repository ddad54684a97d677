from datetime import datetime

import pytest

from storefront.domain.exceptions import NotFoundError
from storefront.domain.models.page import DateRange, OrderSpec, PageRequest, SearchSpec, SortDirection
from storefront.domain.models.store import Store, Worktime


def week():
    return [Worktime(day_id=day, am_open="09:00", am_close="12:00", pm_open="01:00", pm_close="06:00") for day in range(1, 8)]


class TestGetMany:
    @pytest.fixture
    def stores(self, seed):
        first = seed.store("alpha", created_at=datetime(2024, 1, 1), days=[1, 2, 3])
        second = seed.store("beta", is_holiday=True, created_at=datetime(2024, 2, 1))
        third = seed.store("gamma", created_at=datetime(2024, 3, 1), days=[7, 1])
        seed.product("p1", store_id=third)
        seed.product("p2", store_id=third)
        seed.product("p3", store_id=first)
        return {"alpha": first, "beta": second, "gamma": third}

    @pytest.mark.asyncio
    async def test_worktimes_grouped_under_their_store(self, store_repository, stores):
        page = await store_repository.get_many(PageRequest.of())

        assert [store.name for store in page.rows] == ["gamma", "beta", "alpha"]
        assert [[w.day_id for w in store.worktimes] for store in page.rows] == [[1, 7], [], [1, 2, 3]]
        assert all(w.store_id == store.id for store in page.rows for w in store.worktimes)

    @pytest.mark.asyncio
    async def test_product_count(self, store_repository, stores):
        page = await store_repository.get_many(
            PageRequest.of(), order=OrderSpec(by="prod_count", order=SortDirection.DESC)
        )

        assert [(store.name, store.prod_count) for store in page.rows][0] == ("gamma", 2)
        assert {store.name: store.prod_count for store in page.rows} == {"gamma": 2, "alpha": 1, "beta": 0}

    @pytest.mark.asyncio
    async def test_holiday_filter(self, store_repository, stores):
        closed = await store_repository.get_many(PageRequest.of(), search=SearchSpec(in_holiday=True))
        open_ = await store_repository.get_many(PageRequest.of(), search=SearchSpec(in_holiday=False))

        assert [store.name for store in closed.rows] == ["beta"]
        assert [store.name for store in open_.rows] == ["gamma", "alpha"]

    @pytest.mark.asyncio
    async def test_date_filter(self, store_repository, stores):
        page = await store_repository.get_many(
            PageRequest.of(), dates=DateRange(after=datetime(2024, 1, 15), before=datetime(2024, 2, 15))
        )

        assert [store.name for store in page.rows] == ["beta"]

    @pytest.mark.asyncio
    async def test_paging(self, store_repository, stores):
        page = await store_repository.get_many(
            PageRequest(page=2, per_page=2), order=OrderSpec(by="name", order=SortDirection.ASC)
        )

        assert [store.name for store in page.rows] == ["gamma"]
        assert page.total_pages == 2
        assert [w.day_id for w in page.rows[0].worktimes] == [1, 7]

    @pytest.mark.asyncio
    async def test_two_round_trips(self, store_repository, stores, statements):
        await store_repository.get_many(PageRequest.of())

        assert len(statements) == 2


class TestGetById:
    @pytest.mark.asyncio
    async def test_includes_worktimes_and_products(self, store_repository, seed):
        store_id = seed.store("shop", days=[2, 1])
        seed.product("a", store_id=store_id)

        store = await store_repository.get_by_id(store_id)

        assert store.name == "shop"
        assert store.prod_count == 1
        assert [w.day_id for w in store.worktimes] == [1, 2]
        assert [p.name for p in store.products] == ["a"]

    @pytest.mark.asyncio
    async def test_missing(self, store_repository):
        assert await store_repository.get_by_id(404) is None


class TestWrites:
    @pytest.mark.asyncio
    async def test_create_with_week(self, store_repository):
        created = await store_repository.create(Store(name="new shop", is_holiday=False, worktimes=week()))

        assert created.id is not None
        assert created.prod_count == 0
        assert [w.day_id for w in created.worktimes] == list(range(1, 8))
        assert all(w.store_id == created.id for w in created.worktimes)

    @pytest.mark.asyncio
    async def test_update_store_and_listed_worktimes(self, store_repository):
        created = await store_repository.create(Store(name="shop", worktimes=week()))
        monday = created.worktimes[0]

        updated = await store_repository.update(
            Store(id=created.id, name="renamed", is_holiday=True),
            [Worktime(id=monday.id, store_id=created.id, am_open="10:00")],
        )

        assert updated.name == "renamed"
        assert updated.is_holiday is True
        assert updated.worktimes[0].am_open == "10:00"
        assert updated.worktimes[0].am_close == "12:00"
        assert updated.worktimes[1].am_open == "09:00"

    @pytest.mark.asyncio
    async def test_update_with_foreign_worktime_rolls_back(self, store_repository):
        mine = await store_repository.create(Store(name="mine", worktimes=week()))
        other = await store_repository.create(Store(name="other", worktimes=week()))

        with pytest.raises(NotFoundError):
            await store_repository.update(
                Store(id=mine.id, name="renamed", is_holiday=False),
                [Worktime(id=other.worktimes[0].id, am_open="11:00")],
            )

        assert (await store_repository.get_by_id(mine.id)).name == "mine"

    @pytest.mark.asyncio
    async def test_update_missing_store(self, store_repository):
        assert await store_repository.update(Store(id=404, name="x"), []) is None

    @pytest.mark.asyncio
    async def test_delete_cascades_worktimes_and_detaches_products(self, store_repository, product_repository, seed):
        store_id = seed.store("gone", days=[1, 2])
        product_id = seed.product("kept", store_id=store_id)

        deleted = await store_repository.delete(store_id)

        assert deleted.name == "gone"
        assert await store_repository.get_by_id(store_id) is None
        assert (await product_repository.get_by_id(product_id)).store_id is None
        assert await store_repository.delete(store_id) is None

    @pytest.mark.asyncio
    async def test_count_products(self, store_repository, seed):
        store_id = seed.store("s")
        seed.product("a", store_id=store_id)
        seed.product("b", store_id=store_id)

        assert await store_repository.count_products(store_id) == 2
        assert await store_repository.count_products(404) is None
