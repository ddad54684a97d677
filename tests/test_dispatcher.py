import asyncio
import logging
import threading
import time

import pytest
from sqlalchemy import text
from sqlalchemy.exc import OperationalError

from storefront.domain.exceptions import DispatchError, NotFoundError, RepositoryError
from storefront.infrastructure.logging.std_logger_adapter import StdLoggerAdapter
from storefront.infrastructure.persistence.dispatcher import BlockingDispatcher, backend_message


@pytest.fixture
def small_dispatcher():
    return BlockingDispatcher(max_workers=2, logger=StdLoggerAdapter("tests.dispatcher"))


class TestBlockingDispatcher:
    @pytest.mark.asyncio
    async def test_runs_off_the_event_loop_thread(self, dispatcher):
        loop_thread = threading.get_ident()

        worker_thread = await dispatcher.run(threading.get_ident)

        assert worker_thread != loop_thread

    @pytest.mark.asyncio
    async def test_passes_arguments(self, dispatcher):
        result = await dispatcher.run(lambda a, b, scale=1: (a + b) * scale, 2, 3, scale=10)

        assert result == 50

    @pytest.mark.asyncio
    async def test_database_failure_becomes_repository_error(self, dispatcher, session):
        def broken_query():
            with session.begin():
                session.execute(text("SELECT * FROM missing_table"))

        with pytest.raises(RepositoryError, match="missing_table") as exc_info:
            await dispatcher.run(broken_query)

        assert "[SQL:" not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_session_is_usable_after_backend_failure(self, dispatcher, session):
        def broken_query():
            with session.begin():
                session.execute(text("SELECT * FROM missing_table"))

        def good_query():
            with session.begin():
                return session.execute(text("SELECT 1")).scalar()

        with pytest.raises(RepositoryError):
            await dispatcher.run(broken_query)

        assert await dispatcher.run(good_query) == 1

    @pytest.mark.asyncio
    async def test_crash_outside_database_becomes_dispatch_error(self, dispatcher):
        def crash():
            raise KeyError("boom")

        with pytest.raises(DispatchError, match="boom"):
            await dispatcher.run(crash)

    @pytest.mark.asyncio
    async def test_domain_errors_pass_through(self, dispatcher):
        def missing():
            raise NotFoundError("Worktime with id 3 not found")

        with pytest.raises(NotFoundError):
            await dispatcher.run(missing)

    @pytest.mark.asyncio
    async def test_closed_dispatcher_refuses_work(self, dispatcher, caplog):
        dispatcher.close()

        assert dispatcher.closed
        with caplog.at_level(logging.ERROR, logger="tests.dispatcher"):
            with pytest.raises(DispatchError, match="shut down"):
                await dispatcher.run(lambda: 1)

        assert any(record.levelno == logging.ERROR for record in caplog.records)

    @pytest.mark.asyncio
    async def test_bounds_in_flight_calls(self, small_dispatcher):
        lock = threading.Lock()
        state = {"running": 0, "peak": 0}

        def slow():
            with lock:
                state["running"] += 1
                state["peak"] = max(state["peak"], state["running"])
            time.sleep(0.05)
            with lock:
                state["running"] -= 1

        await asyncio.gather(*(small_dispatcher.run(slow) for _ in range(6)))

        assert state["peak"] <= 2

    @pytest.mark.asyncio
    async def test_started_call_completes_when_caller_is_cancelled(self, small_dispatcher):
        started = threading.Event()
        finished = threading.Event()

        def slow():
            started.set()
            time.sleep(0.1)
            finished.set()

        task = asyncio.create_task(small_dispatcher.run(slow))
        while not started.is_set():
            await asyncio.sleep(0.005)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert finished.is_set()

    @pytest.mark.asyncio
    async def test_caller_timeout_waits_for_the_worker(self, small_dispatcher):
        finished = threading.Event()

        def slow():
            time.sleep(0.1)
            finished.set()

        with pytest.raises(asyncio.TimeoutError):
            await asyncio.wait_for(small_dispatcher.run(slow), timeout=0.01)

        assert finished.is_set()

    @pytest.mark.asyncio
    async def test_session_released_only_after_cancelled_call_returns(self, dispatcher, session):
        started = threading.Event()
        in_flight = {"active": False}

        def slow_query():
            in_flight["active"] = True
            started.set()
            with session.begin():
                time.sleep(0.05)
                session.execute(text("SELECT 1"))
            in_flight["active"] = False

        task = asyncio.create_task(dispatcher.run(slow_query))
        while not started.is_set():
            await asyncio.sleep(0.005)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        assert in_flight["active"] is False
        assert not session.in_transaction()

    def test_rejects_empty_pool(self):
        with pytest.raises(ValueError):
            BlockingDispatcher(max_workers=0, logger=StdLoggerAdapter())


class TestBackendMessage:
    def test_uses_driver_message(self):
        error = OperationalError("SELECT 1", {}, Exception("connection refused"))

        assert backend_message(error) == "connection refused"
