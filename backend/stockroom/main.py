from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stockroom.api import categories, movements, products, reports, transfer
from stockroom.core.config import Settings, settings as default_settings
from stockroom.core.logging_config import configure_logging
from stockroom.services.persistence import InventoryPersistence
from stockroom.services.storage import KeyValueStorage
from stockroom.store.store import Store

VERSION = "0.1.0"


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        storage = KeyValueStorage.from_url(settings.DATABASE_URL)
        persistence = InventoryPersistence(storage, seed_on_first_run=settings.SEED_ON_FIRST_RUN)
        store = Store(persistence, settings=settings)
        store.load_data()
        app.state.store = store
        try:
            yield
        finally:
            app.state.store = None
            storage.close()

    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        description="Product, category and stock-movement inventory with JSON export/import",
        version=VERSION,
        lifespan=lifespan,
    )

    # CORS - the UI is served from a different origin during development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Routers
    app.include_router(products.router)
    app.include_router(categories.router)
    app.include_router(movements.router)
    app.include_router(reports.router)
    app.include_router(transfer.router)

    @app.get("/health")
    async def health_check():
        return {"status": "ok", "version": VERSION}

    return app


app = create_app()
