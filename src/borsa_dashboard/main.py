"""Main module for the Borsa dashboard service."""
import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from borsa_dashboard import config
from borsa_dashboard.container import Container, init_container
from borsa_dashboard.errors import DashboardError, dashboard_error_handler
from borsa_dashboard.routers import (admin_router, auth_router,
                                     instruments_router, news_router,
                                     notifications_router, prices_router,
                                     subscriptions_router, wishlist_router)

logger = logging.getLogger(__name__)


def configure_logging(level: str = config.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_app(container: Container | None = None, *, start_pollers: bool = True) -> FastAPI:
    """Build the API around a container; tests pass their own with overridden providers."""
    container = container or init_container()

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Create tables and start pollers at startup; stop pollers and close providers on shutdown."""
        container.database().init_db()
        container.subscriptions().expire_plans()
        board = container.market_board()
        if start_pollers:
            board.start()

        yield

        await board.stop()
        await container.price_service().close()
        await container.news_provider().close()
        container.database().dispose()

    app = FastAPI(
        title="Borsa Dashboard",
        description="BIST and crypto prices, prediction labels and subscription tiers",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.container = container
    app.add_exception_handler(DashboardError, dashboard_error_handler)

    app.include_router(prices_router)
    app.include_router(instruments_router)
    app.include_router(news_router)
    app.include_router(auth_router)
    app.include_router(subscriptions_router)
    app.include_router(admin_router)
    app.include_router(wishlist_router)
    app.include_router(notifications_router)

    @app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return app


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    configure_logging()
    uvicorn.run(create_app(), host="127.0.0.1", port=8001)
