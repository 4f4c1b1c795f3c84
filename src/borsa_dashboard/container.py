"""DI container. create_app() builds one and keeps it on app.state.container."""
from dependency_injector import containers, providers

from borsa_dashboard import config
from borsa_dashboard.catalog import default_catalog
from borsa_dashboard.db import (Category, Database, NotificationEntry,
                                WishlistEntry)
from borsa_dashboard.providers import (CoinGeckoProvider, NewsProvider,
                                       SimulatedProvider, YFinanceProvider)
from borsa_dashboard.services import (AuthService, MarketBoard, NewsService,
                                      PriceService, SubscriptionWorkflow,
                                      UserContentStore)


class Container(containers.DeclarativeContainer):
    database = providers.Singleton(Database, url=config.DATABASE_URL, echo=config.SQL_ECHO)
    catalog = providers.Singleton(default_catalog)

    stocks_provider = providers.Singleton(YFinanceProvider, timeout=config.HTTP_TIMEOUT_SECONDS)
    crypto_provider = providers.Singleton(
        CoinGeckoProvider,
        api_key=config.COINGECKO_API_KEY,
        timeout=config.HTTP_TIMEOUT_SECONDS,
    )
    simulated_stocks = providers.Singleton(SimulatedProvider, catalog, Category.EQUITY)
    simulated_crypto = providers.Singleton(SimulatedProvider, catalog, Category.CRYPTO)
    news_provider = providers.Singleton(NewsProvider)

    price_service = providers.Singleton(
        PriceService,
        providers=providers.Dict({Category.EQUITY: stocks_provider, Category.CRYPTO: crypto_provider}),
        fallbacks=providers.Dict({Category.EQUITY: simulated_stocks, Category.CRYPTO: simulated_crypto}),
        timeout_seconds=config.HTTP_TIMEOUT_SECONDS,
    )
    market_board = providers.Singleton(
        MarketBoard,
        catalog,
        price_service,
        intervals={
            Category.CRYPTO: config.PRICE_POLL_SECONDS,
            Category.EQUITY: config.CATEGORY_POLL_SECONDS,
        },
        timeout_seconds=config.HTTP_TIMEOUT_SECONDS,
    )
    news_service = providers.Singleton(
        NewsService, news_provider, catalog, ttl_seconds=config.NEWS_POLL_SECONDS
    )

    auth_service = providers.Singleton(AuthService, database)
    subscriptions = providers.Singleton(SubscriptionWorkflow, database)
    wishlist = providers.Singleton(UserContentStore, database, WishlistEntry, catalog)
    notifications = providers.Singleton(UserContentStore, database, NotificationEntry, catalog)


def init_container() -> Container:
    """Create the container with settings from the environment."""
    return Container()
