"""Application factory for the QuickData FastAPI app.

This module exposes `create_store(config)` which composes the storage
backend, scheduler and `TypedStore`, and `create_app(config) -> FastAPI`
which owns that store for the lifetime of the application. Avoids
performing side-effects at import time so tests can construct isolated
apps.

To create an app for production or local runs:

    from quickdata_lib.main import create_app, Config
    app = create_app(Config())

Note: we intentionally do not create a global `app` or store at import time.
"""
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI

from quickdata_lib.config import Config
from quickdata_lib.logging_config import configure_logging
from quickdata_lib.quickdata import AsyncioScheduler, Scheduler, TypedStore, create_scheduler
from quickdata_lib.services import ServiceContainer
from quickdata_lib.storage import create_storage

__all__ = ["Config", "create_store", "create_app"]

logger = logging.getLogger(__name__)


def _loop_running() -> bool:
    try:
        asyncio.get_running_loop()
    except RuntimeError:
        return False
    return True


def create_store(config: Config, scheduler: Optional[Scheduler] = None) -> TypedStore:
    """Compose storage and scheduler from `config` and load the store.

    Without an explicit `scheduler`, an 'asyncio' setting falls back to the
    timer scheduler when no event loop is running, so plain scripts can
    call `set` without one.
    """
    storage = create_storage(backend=config.storage_backend, data_dir=config.data_dir)
    if scheduler is None:
        name = config.scheduler
        if name == "asyncio" and not _loop_running():
            logger.debug("No running event loop, saving QuickData on a timer thread")
            name = "timer"
        scheduler = create_scheduler(name, delay=config.save_delay)
    return TypedStore(storage, scheduler, name=config.store_name)


def create_app(config: Config, store: Optional[TypedStore] = None) -> FastAPI:
    """Create and return a configured FastAPI application.

    The store is loaded here (or taken from `store`) and registered in the
    service container as 'quickdata_store'. On shutdown any unsaved change
    is flushed to disk.
    """
    app_logger = configure_logging(level=config.log_level)

    if store is None:
        # the lifespan binds an asyncio scheduler to the server loop
        store = create_store(config, scheduler=create_scheduler(config.scheduler, delay=config.save_delay))

    container = ServiceContainer()
    container.register_singleton("quickdata_store", store)
    container.register_singleton("config", config)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if isinstance(store.scheduler, AsyncioScheduler):
            store.scheduler.bind(asyncio.get_running_loop())
        yield
        app_logger.info("Flushing QuickData store before shutdown")
        store.flush()

    app = FastAPI(title="QuickData Server", lifespan=lifespan)
    # Expose only the explicit service container on app.state.
    app.state.container = container

    # Router registration: import routers here to avoid import-time side-effects
    from quickdata_lib.quickdata.api import router as quickdata_router
    from quickdata_lib.server.api import router as server_router

    app.include_router(quickdata_router, prefix='/api')
    app.include_router(server_router, prefix='/api')

    return app
