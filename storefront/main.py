# storefront/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from storefront.api import api_router
from storefront.api.errors import register_error_handlers
from storefront.api.routers import health
from storefront.data.database import Base, make_engine, make_session_factory
from storefront.data.seed import ensure_admin, seed_catalog
from storefront.services.lock_service import LockService
from storefront.utils import settings
from storefront.utils.logging import get_logger

# import wszystkich modeli przed create_all
import storefront.data.models  # noqa: F401

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = app.state.engine
    logger.info(f"Initializing database, tables: {list(Base.metadata.tables.keys())}")

    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Failed to create tables")
        raise

    db = app.state.session_factory()
    try:
        if app.state.seed_catalog:
            seed_catalog(db)
        ensure_admin(db, settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    finally:
        db.close()

    yield

    logger.info("Shutting down, disposing connection pool")
    app.state.lock_service.close()
    engine.dispose()


def create_app(
    database_url: str | None = None,
    lock_service: LockService | None = None,
    seed_catalog: bool | None = None,
) -> FastAPI:
    app = FastAPI(
        title="Storefront",
        version="1.0.0",
        lifespan=lifespan,
    )

    # store i locki naleza do aplikacji, nie do modulu
    app.state.engine = make_engine(database_url or settings.DATABASE_URL)
    app.state.session_factory = make_session_factory(app.state.engine)
    app.state.lock_service = lock_service or LockService()
    app.state.seed_catalog = settings.SEED_CATALOG if seed_catalog is None else seed_catalog

    register_error_handlers(app)

    app.include_router(health.router)
    app.include_router(api_router)

    return app


if __name__ == "__main__":
    uvicorn.run(create_app(), host="0.0.0.0", port=8000)
