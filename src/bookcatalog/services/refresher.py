"""Periodic background refresh of the book catalogue.

Each tick reads the catalogue and logs what it saw; it does not modify
any books. The task is owned by the application lifespan: ``start()`` at
startup, ``stop()`` at shutdown.
"""

import asyncio
import contextlib

import structlog

from bookcatalog.repositories.base import BookRepository

logger = structlog.get_logger(__name__)


class BookRefresher:
    """Cancellable periodic task over a BookRepository."""

    def __init__(self, repository: BookRepository, interval_seconds: float = 30) -> None:
        self.repository = repository
        self.interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start ticking. Calling start on a running refresher is a no-op."""
        if self.running:
            return
        logger.info("book_refresher_starting", interval_seconds=self.interval_seconds)
        self._task = asyncio.create_task(self._run(), name="book-refresher")

    async def stop(self) -> None:
        """Cancel the task and wait for it to finish."""
        if self._task is None:
            return
        logger.info("book_refresher_stopping")
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None

    async def refresh_once(self) -> int:
        """Run a single refresh tick.

        Returns:
            Number of books in the catalogue
        """
        count = await self.repository.count()
        logger.info("book_refresh_executed", book_count=count)
        return count

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self.interval_seconds)
            try:
                await self.refresh_once()
            except Exception:
                logger.exception("book_refresh_failed")
