"""
Stockview — FastAPI app factory with startup data loading.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockview import __version__
from stockview.api.dependencies import set_store
from stockview.api.router_dashboard import router as dashboard_router
from stockview.api.router_meta import router as meta_router
from stockview.api.router_session import router as session_router
from stockview.api.router_table import router as table_router
from stockview.config import configure_logging
from stockview.data.loader import DatasetLoadError
from stockview.data.store import DataStore

logger = logging.getLogger(__name__)


def _load_store() -> DataStore:
    store = DataStore()
    try:
        store.load()
    except DatasetLoadError as exc:
        # Serve with an empty dataset; /api/csv reports the failure to clients
        logger.error("%s", exc)
    return store


def create_app(store: DataStore | None = None) -> FastAPI:
    """Build the app. A pre-loaded store skips reading the dataset file."""

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging()
        active = store if store is not None else _load_store()
        set_store(active)
        if active.row_count() > 0:
            logger.info(
                "Stockview ready — %s records, %s years, %s regions, %s categories",
                f"{active.row_count():,}", len(active.years()),
                len(active.regions()), len(active.categories()),
            )
        else:
            logger.warning("Stockview ready — no data loaded")
        yield

    app = FastAPI(
        title="Stockview API",
        description="Fish-stock assessment aggregates with selection and highlight filters",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(meta_router)
    app.include_router(dashboard_router)
    app.include_router(session_router)
    app.include_router(table_router)

    return app


app = create_app()
