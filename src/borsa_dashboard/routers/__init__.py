"""API routers.

- /prices - price proxy (Yahoo Finance for BIST, CoinGecko for crypto)
- /instruments - merged, tier-gated market board
- /news - instrument headlines (ultimate)
- /auth - accounts and sessions
- /subscriptions, /admin - upgrade requests, access codes, downgrades
- /wishlist, /notifications - per-user symbol sets
"""
from borsa_dashboard.routers.admin import router as admin_router
from borsa_dashboard.routers.auth import router as auth_router
from borsa_dashboard.routers.content import (notifications_router,
                                             wishlist_router)
from borsa_dashboard.routers.instruments import router as instruments_router
from borsa_dashboard.routers.news import router as news_router
from borsa_dashboard.routers.prices import router as prices_router
from borsa_dashboard.routers.subscriptions import router as subscriptions_router

__all__ = [
    "admin_router",
    "auth_router",
    "instruments_router",
    "news_router",
    "notifications_router",
    "prices_router",
    "subscriptions_router",
    "wishlist_router",
]
