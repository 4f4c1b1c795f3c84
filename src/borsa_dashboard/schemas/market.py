"""Market-side schemas: catalog instruments, live quotes, merged and gated views."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from borsa_dashboard.db import Category
from borsa_dashboard.utils import utcnow


class Prediction(str, Enum):
    """Pre-baked prediction label carried by the catalog."""

    RISE = "rise"
    WATCH = "watch"
    RISKY = "risky"


class Instrument(BaseModel):
    """Static catalog entry. Never mutated; live quotes only shadow it."""

    model_config = {"frozen": True}

    symbol: str
    name: str
    category: Category
    sector: str
    price: float
    change_pct: float
    volume: float
    market_cap: float
    prediction: Prediction
    confidence: int = Field(ge=0, le=100)
    sentiment: str
    circulating_supply: float | None = None


class LiveQuote(BaseModel):
    """Normalized quote from any provider for one symbol."""

    symbol: str
    category: Category
    price: float
    change_pct: float
    volume: float | None = None
    market_cap: float | None = None
    fetched_at: datetime = Field(default_factory=utcnow)


class QuoteSnapshot(BaseModel):
    """Result of one fetch cycle: quotes keyed by catalog symbol.

    degraded is set when the quotes are cached or simulated rather than live.
    """

    category: Category
    quotes: dict[str, LiveQuote] = Field(default_factory=dict)
    fetched_at: datetime = Field(default_factory=utcnow)
    degraded: bool = False


class MergedInstrument(BaseModel):
    """Catalog entry with live price fields overlaid when a quote exists."""

    symbol: str
    name: str
    category: Category
    sector: str
    price: float
    change_pct: float
    volume: float
    market_cap: float
    prediction: Prediction
    confidence: int
    sentiment: str
    is_live: bool = False
    quoted_at: datetime | None = None


class InstrumentView(BaseModel):
    """Merged instrument after entitlement gating; masked fields are None."""

    symbol: str
    name: str
    category: Category
    sector: str
    price: float
    change_pct: float
    volume: float
    market_cap: float
    prediction: Prediction | None = None
    confidence: int | None = None
    sentiment: str | None = None
    masked_fields: list[str] = Field(default_factory=list)
    prompt: str | None = None
    is_live: bool = False
    quoted_at: datetime | None = None
    stale: bool = False


class PriceRequest(BaseModel):
    """Body of POST /prices."""

    category: Category
    symbols: list[str] = Field(min_length=1)


class QuotePayload(BaseModel):
    """Wire shape of one quote in a price response."""

    model_config = {"populate_by_name": True}

    price: float
    change_pct: float = Field(serialization_alias="changePct")
    volume: float | None = None
    market_cap: float | None = Field(default=None, serialization_alias="marketCap")


class PriceResponse(BaseModel):
    """Body returned by the price proxy."""

    model_config = {"populate_by_name": True}

    category: Category
    quotes: dict[str, QuotePayload]
    fetched_at: datetime = Field(serialization_alias="fetchedAt")
    degraded: bool = False

    @classmethod
    def from_snapshot(cls, snapshot: QuoteSnapshot) -> "PriceResponse":
        return cls(
            category=snapshot.category,
            quotes={
                sym: QuotePayload(
                    price=q.price,
                    change_pct=q.change_pct,
                    volume=q.volume,
                    market_cap=q.market_cap,
                )
                for sym, q in snapshot.quotes.items()
            },
            fetched_at=snapshot.fetched_at,
            degraded=snapshot.degraded,
        )


class NewsSentiment(str, Enum):
    POSITIVE = "positive"
    NEUTRAL = "neutral"
    NEGATIVE = "negative"


class NewsRequest(BaseModel):
    """Body of POST /news."""

    symbol: str
    name: str
    category: Category


class NewsItem(BaseModel):
    """One headline for an instrument."""

    model_config = {"populate_by_name": True}

    id: str
    title: str
    summary: str
    published_at: datetime = Field(serialization_alias="publishedAt")
    sentiment: NewsSentiment
    source: str
    url: str | None = None


class NewsResponse(BaseModel):
    items: list[NewsItem]
