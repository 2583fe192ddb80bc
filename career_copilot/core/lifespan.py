import asyncio
import contextlib
import logging
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)

CACHE_PURGE_INTERVAL_S = 600


@asynccontextmanager
async def lifespan(app):
    cache = app.state.response_cache
    stop_event = asyncio.Event()

    async def periodic_purge() -> None:
        while not stop_event.is_set():
            removed = cache.purge_expired()
            if removed:
                logger.info("response_cache_purge removed=%s remaining=%s", removed, cache.size())
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=CACHE_PURGE_INTERVAL_S)
            except asyncio.TimeoutError:
                continue

    purge_task = asyncio.create_task(periodic_purge())
    yield
    stop_event.set()
    if not purge_task.done():
        purge_task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await purge_task
