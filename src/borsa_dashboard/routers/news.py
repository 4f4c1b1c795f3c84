"""Instrument news route (ultimate tier)."""
from fastapi import APIRouter

from borsa_dashboard.deps import NewsServiceDep, OptionalUser
from borsa_dashboard.schemas import NewsRequest, NewsResponse

router = APIRouter(prefix="/news", tags=["news"])


@router.post("", response_model=NewsResponse)
async def get_news(body: NewsRequest, service: NewsServiceDep, user: OptionalUser) -> NewsResponse:
    items = await service.get_news(body, user.tier if user else None)
    return NewsResponse(items=items)
