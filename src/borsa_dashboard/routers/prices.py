"""Price proxy route: live quotes for a category with degraded fallback."""
import logging

from fastapi import APIRouter

from borsa_dashboard.deps import PriceServiceDep
from borsa_dashboard.schemas import PriceRequest, PriceResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/prices", tags=["prices"])


@router.post("", response_model=PriceResponse)
async def get_prices(body: PriceRequest, service: PriceServiceDep) -> PriceResponse:
    """Quotes keyed by ticker for the requested symbols.

    Never fails on upstream errors: the response then carries the last good
    quotes (or simulated ones) and `degraded: true`.
    """
    snapshot = await service.fetch(body.category, body.symbols)
    return PriceResponse.from_snapshot(snapshot)
