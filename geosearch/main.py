import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from geosearch.api.errors import register_exception_handlers
from geosearch.api.v1.routes.health import router as health_router
from geosearch.api.v1.routes.search import router as search_router
from geosearch.config import get_settings
from geosearch.infrastructure.external_apis.http_client import close_shared_client

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    # Startup
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(
        f"Starting up geo search: index={settings.ELASTIC_SEARCH_URL}, "
        f"dataset={settings.DATASET_INDEX}, postcodes={settings.POSTCODE_INDEX}, "
        f"boundaries={settings.BOUNDARY_FILE_INDEX}"
    )

    yield

    # Shutdown
    logger.info("Shutting down geo search...")
    await close_shared_client()


def create_app() -> FastAPI:
    """Create FastAPI application and include routers."""
    app = FastAPI(
        title="Census Geo Search",
        version="0.1.0",
        lifespan=lifespan,
    )

    # Any origin may call the search API
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(search_router)
    app.include_router(health_router)
    return app


app = create_app()


def run():
    """Run the API with uvicorn on BIND_ADDR."""
    settings = get_settings()
    uvicorn.run(app, host=settings.bind_host, port=settings.bind_port)


if __name__ == "__main__":
    run()
