"""Wishlist and notification routes; both are per-user symbol sets."""
from collections.abc import Callable
from typing import Annotated

from fastapi import APIRouter, Depends

from borsa_dashboard.deps import CurrentUser, get_notifications, get_wishlist
from borsa_dashboard.schemas import ContainsResult, ToggleRequest, ToggleResult
from borsa_dashboard.services import Feature, UserContentStore, require


def _content_router(
    prefix: str, feature: Feature, get_store: Callable[..., UserContentStore]
) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[feature.value])
    Store = Annotated[UserContentStore, Depends(get_store)]

    @router.post("", response_model=ToggleResult)
    def toggle(body: ToggleRequest, user: CurrentUser, store: Store) -> ToggleResult:
        """Add the symbol if absent, remove it if present."""
        require(user.tier, feature)
        symbol = body.symbol.strip().upper()
        return ToggleResult(symbol=symbol, outcome=store.toggle(user.id, symbol))

    @router.get("", response_model=list[str])
    def list_symbols(user: CurrentUser, store: Store) -> list[str]:
        require(user.tier, feature)
        return store.list_symbols(user.id)

    @router.get("/{symbol}", response_model=ContainsResult)
    def contains(symbol: str, user: CurrentUser, store: Store) -> ContainsResult:
        require(user.tier, feature)
        symbol = symbol.strip().upper()
        return ContainsResult(symbol=symbol, present=store.contains(user.id, symbol))

    return router


wishlist_router = _content_router("/wishlist", Feature.WISHLIST, get_wishlist)
notifications_router = _content_router("/notifications", Feature.NOTIFICATIONS, get_notifications)
