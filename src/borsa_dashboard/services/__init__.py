"""Service layer: polling, merging, entitlement gating and account workflows."""
from borsa_dashboard.services.auth import AuthService, AuthSession
from borsa_dashboard.services.entitlements import (Feature, Visibility,
                                                   entitlements_for,
                                                   gate_instrument,
                                                   prompt_for, require,
                                                   visibility_for)
from borsa_dashboard.services.localization import Localization
from borsa_dashboard.services.market_board import MarketBoard
from borsa_dashboard.services.merger import merge
from borsa_dashboard.services.news_service import NewsService
from borsa_dashboard.services.poller import PricePoller
from borsa_dashboard.services.price_service import PriceService
from borsa_dashboard.services.subscriptions import SubscriptionWorkflow
from borsa_dashboard.services.user_content import UserContentStore

__all__ = [
    "AuthService",
    "AuthSession",
    "Feature",
    "Localization",
    "MarketBoard",
    "NewsService",
    "PricePoller",
    "PriceService",
    "SubscriptionWorkflow",
    "UserContentStore",
    "Visibility",
    "entitlements_for",
    "gate_instrument",
    "merge",
    "prompt_for",
    "require",
    "visibility_for",
]
