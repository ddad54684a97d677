import asyncio
from functools import partial
from typing import Callable, Optional, TypeVar

import anyio
import anyio.to_thread
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from storefront.domain.exceptions import DispatchError, DomainError, RepositoryError
from storefront.domain.ports.services.logger import LoggerPort

R = TypeVar("R")


def backend_message(error: SQLAlchemyError) -> str:
    """Driver message without SQLAlchemy's statement/parameter trailer."""
    if isinstance(error, DBAPIError) and error.orig is not None:
        return str(error.orig).strip()
    return str(error)


class BlockingDispatcher:
    """Runs blocking database work on worker threads.

    At most ``max_workers`` calls are in flight at once; further calls wait for
    a free slot instead of checking out more connections. Calls are never
    interrupted: if the awaiting task is cancelled, the call still runs to the
    end and the cancellation is re-raised only after the worker has returned,
    so the session it uses is never released underneath it.
    """

    def __init__(self, max_workers: int, logger: LoggerPort):
        if max_workers < 1:
            raise ValueError("max_workers must be >= 1")
        self.max_workers = max_workers
        self._logger = logger
        self._limiter: Optional[anyio.CapacityLimiter] = None
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def _get_limiter(self) -> anyio.CapacityLimiter:
        # Created lazily: the limiter binds to the running event loop
        if self._limiter is None:
            self._limiter = anyio.CapacityLimiter(self.max_workers)
        return self._limiter

    async def run(self, func: Callable[..., R], *args, **kwargs) -> R:
        if self._closed:
            self._logger.error("Refusing %s: dispatcher is shut down", getattr(func, "__name__", func))
            raise DispatchError("Database dispatcher is shut down")

        call = asyncio.ensure_future(
            anyio.to_thread.run_sync(partial(self._call, func, *args, **kwargs), limiter=self._get_limiter())
        )
        try:
            return await asyncio.shield(call)
        except asyncio.CancelledError:
            # The worker still holds the request's session; release nothing until it returns
            await self._wait_out(call)
            raise
        except DomainError:
            raise
        except Exception as e:
            self._logger.exception("Blocking task %s failed outside the database layer", getattr(func, "__name__", func))
            raise DispatchError(f"Blocking task failed: {e}") from e

    @staticmethod
    async def _wait_out(call: "asyncio.Future") -> None:
        while not call.done():
            try:
                await asyncio.wait({call})
            except asyncio.CancelledError:
                continue
        if not call.cancelled():
            # Outcome is discarded, mark it retrieved
            call.exception()

    def _call(self, func: Callable[..., R], *args, **kwargs) -> R:
        try:
            return func(*args, **kwargs)
        except SQLAlchemyError as e:
            self._logger.exception("Database call %s failed", getattr(func, "__name__", func))
            raise RepositoryError(backend_message(e)) from e
