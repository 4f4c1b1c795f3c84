"""Market board routes: merged, tier-gated instrument lists."""
from fastapi import APIRouter, Query

from borsa_dashboard.db import Category
from borsa_dashboard.deps import CatalogDep, MarketBoardDep, OptionalUser
from borsa_dashboard.errors import NotFound
from borsa_dashboard.schemas import Instrument, InstrumentView
from borsa_dashboard.services import Feature, entitlements_for, prompt_for

router = APIRouter(prefix="/instruments", tags=["instruments"])


@router.get("/search", response_model=list[Instrument])
def search_instruments(
    catalog: CatalogDep,
    q: str = Query(min_length=1, description="Ticker or name fragment"),
    limit: int = Query(default=10, ge=1, le=50),
) -> list[Instrument]:
    return catalog.search(q, limit=limit)


@router.get("/entitlements")
def get_entitlements(user: OptionalUser) -> dict[str, dict[str, str | None]]:
    """Visibility and prompt key of every gated feature for the caller's tier."""
    tier = user.tier if user else None
    return {
        feature: {"visibility": vis.value, "prompt": prompt_for(tier, Feature(feature))}
        for feature, vis in entitlements_for(tier).items()
    }


@router.get("/{category}", response_model=list[InstrumentView])
def list_instruments(
    category: Category, board: MarketBoardDep, user: OptionalUser
) -> list[InstrumentView]:
    """All instruments of a category in catalog order, gated for the caller."""
    return board.view(category, user.tier if user else None)


@router.get("/{category}/{symbol}", response_model=InstrumentView)
def get_instrument(
    category: Category, symbol: str, board: MarketBoardDep, user: OptionalUser
) -> InstrumentView:
    view = board.instrument(symbol, user.tier if user else None)
    if view.category != category:
        raise NotFound(f"Instrument '{symbol}' not found in {category.value}")
    return view
