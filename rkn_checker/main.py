# rkn_checker/main.py
from __future__ import annotations
from typing import Optional

from fastapi import FastAPI

from rkn_checker.api.exception_handlers import EXCEPTION_HANDLERS
from rkn_checker.api.router import router
from rkn_checker.core.config import Settings
from rkn_checker.core.fetcher import DumpFetcher
from rkn_checker.core.snapshot import SnapshotStore
from rkn_checker.services.refresher import DumpRefresher


def build_refresher(settings: Settings, store: SnapshotStore) -> DumpRefresher:
    fetcher = DumpFetcher(settings.dump_url, timeout=settings.dump_download_timeout)
    return DumpRefresher(
        store,
        fetcher,
        dump_dir=settings.dump_dir,
        retry_interval=settings.dump_download_retry,
        interval=settings.refresh_period,
    )


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[SnapshotStore] = None,
    refresher: Optional[DumpRefresher] = None,
) -> FastAPI:
    """
    Assemble the API.

    The store is shared by the refresher (writer) and the check endpoint
    (reader). When no refresher is passed one is built from settings; pass a
    pre-filled store without a refresher to serve a fixed snapshot.
    """
    settings = settings or Settings()
    if store is None:
        store = SnapshotStore()
        refresher = refresher or build_refresher(settings, store)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings
    app.state.store = store
    app.state.refresher = refresher

    for exc_type, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc_type, handler)

    # Blocks until the first dump is downloaded and parsed; uvicorn does not
    # accept connections before startup handlers return.
    @app.on_event("startup")
    def _load_first_snapshot():
        if refresher is None:
            return
        refresher.initial_load()
        refresher.start()

    app.include_router(router)
    return app

