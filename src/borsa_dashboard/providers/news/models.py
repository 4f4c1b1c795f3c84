"""Templates for the canned headline feed."""
from dataclasses import dataclass

from borsa_dashboard.schemas import NewsSentiment


@dataclass(frozen=True)
class HeadlineTemplate:
    title: str
    summary: str
    hours_ago: int
    sentiment: NewsSentiment
    source: str


HEADLINES: tuple[HeadlineTemplate, ...] = (
    HeadlineTemplate(
        "{name} Shows Strong Performance in Recent Trading",
        "{symbol} has demonstrated significant market activity with notable volume increases.",
        2,
        NewsSentiment.POSITIVE,
        "Financial Times",
    ),
    HeadlineTemplate(
        "Market Analysis: {name} Outlook",
        "Analysts provide insights on {symbol} performance and future projections.",
        5,
        NewsSentiment.NEUTRAL,
        "Bloomberg",
    ),
    HeadlineTemplate(
        "{name} Announces Strategic Updates",
        "{symbol} reveals new developments that could impact market position.",
        24,
        NewsSentiment.POSITIVE,
        "Reuters",
    ),
    HeadlineTemplate(
        "Market Volatility Affects {name}",
        "{symbol} experiences fluctuations amid broader market movements.",
        48,
        NewsSentiment.NEGATIVE,
        "Wall Street Journal",
    ),
)
