"""Tier-gated visibility: one decision table for every gated field and feature.

Views never branch on tiers themselves; they ask visibility_for() and render
the answer. Anonymous callers are passed as tier None and resolve to the
same decisions as free, differing only in the prompt key shown.
"""
from enum import Enum

from borsa_dashboard.db import Tier
from borsa_dashboard.errors import AuthenticationRequired, FeatureLocked
from borsa_dashboard.schemas import InstrumentView, MergedInstrument


class Feature(str, Enum):
    PREDICTION = "prediction"
    SENTIMENT = "sentiment"
    NEWS = "news"
    AUTOMATED_TRADING = "automated_trading"
    ALERTS = "alerts"
    WISHLIST = "wishlist"
    NOTIFICATIONS = "notifications"


class Visibility(str, Enum):
    VISIBLE = "visible"
    MASKED = "masked"
    LOCKED = "locked"


# Features that need a signed-in account but no paid tier.
ACCOUNT_FEATURES = frozenset({Feature.ALERTS, Feature.WISHLIST, Feature.NOTIFICATIONS})

# Lowest tier at which the feature is fully visible, and what lower tiers get.
_TABLE: dict[Feature, tuple[Tier, Visibility]] = {
    Feature.PREDICTION: (Tier.PRO, Visibility.MASKED),
    Feature.SENTIMENT: (Tier.PRO, Visibility.MASKED),
    Feature.NEWS: (Tier.ULTIMATE, Visibility.LOCKED),
    Feature.AUTOMATED_TRADING: (Tier.ULTIMATE, Visibility.LOCKED),
    Feature.ALERTS: (Tier.FREE, Visibility.LOCKED),
    Feature.WISHLIST: (Tier.FREE, Visibility.LOCKED),
    Feature.NOTIFICATIONS: (Tier.FREE, Visibility.LOCKED),
}

# Instrument fields withheld for each masked feature.
_MASKED_FIELDS: dict[Feature, tuple[str, ...]] = {
    Feature.PREDICTION: ("prediction", "confidence"),
    Feature.SENTIMENT: ("sentiment",),
}

SIGN_IN_PROMPT = "signInRequired"
UPGRADE_PROMPT = "upgradeRequired"


def visibility_for(tier: Tier | None, feature: Feature) -> Visibility:
    """Resolve a feature for a tier; None means anonymous."""
    required, otherwise = _TABLE[feature]
    if tier is None:
        # Account-only features are visible to free accounts, so anonymous must be gated
        # explicitly; everything else treats anonymous as free.
        if feature in ACCOUNT_FEATURES:
            return otherwise
        tier = Tier.FREE
    return Visibility.VISIBLE if tier.rank >= required.rank else otherwise


def prompt_for(tier: Tier | None, feature: Feature) -> str | None:
    """Copy key for a gated feature, or None when it is visible."""
    if visibility_for(tier, feature) == Visibility.VISIBLE:
        return None
    return SIGN_IN_PROMPT if tier is None else UPGRADE_PROMPT


def require(tier: Tier | None, feature: Feature) -> None:
    """Fail closed unless the feature is visible for the tier.

    Raises AuthenticationRequired for anonymous callers and FeatureLocked for
    signed-in callers whose tier is too low.
    """
    if visibility_for(tier, feature) == Visibility.VISIBLE:
        return
    if tier is None:
        raise AuthenticationRequired(f"Sign in to use {feature.value}", prompt=SIGN_IN_PROMPT)
    raise FeatureLocked(f"Upgrade your plan to use {feature.value}", prompt=UPGRADE_PROMPT)


def gate_instrument(
    merged: MergedInstrument, tier: Tier | None, *, stale: bool = False
) -> InstrumentView:
    """Apply the table to one merged instrument; masked values become None."""
    data = merged.model_dump()
    masked: list[str] = []
    prompt = None
    for feature, fields in _MASKED_FIELDS.items():
        if visibility_for(tier, feature) != Visibility.VISIBLE:
            for field in fields:
                data[field] = None
                masked.append(field)
            prompt = prompt_for(tier, feature)
    return InstrumentView(**data, masked_fields=masked, prompt=prompt, stale=stale)


def entitlements_for(tier: Tier | None) -> dict[str, Visibility]:
    """Full feature map for a tier, e.g. for a client to render locks up front."""
    return {feature.value: visibility_for(tier, feature) for feature in Feature}
