"""Pydantic schemas for API and runtime use. Not persisted to DB."""
from borsa_dashboard.schemas.accounts import (AccessCodeIn, AccessCodeOut,
                                              AccountOut, ContainsResult,
                                              DowngradeRequest,
                                              PasswordResetConfirm,
                                              PasswordResetRequest,
                                              PaymentRequestOut, RedeemRequest,
                                              RedeemResult, SignInRequest,
                                              SignUpRequest, ToggleOutcome,
                                              ToggleRequest, ToggleResult,
                                              TokenResponse, UpgradeRequest)
from borsa_dashboard.schemas.market import (Instrument, InstrumentView,
                                            LiveQuote, MergedInstrument,
                                            NewsItem, NewsRequest,
                                            NewsResponse, NewsSentiment,
                                            Prediction, PriceRequest,
                                            PriceResponse, QuotePayload,
                                            QuoteSnapshot)

__all__ = [
    "AccessCodeIn",
    "AccessCodeOut",
    "AccountOut",
    "ContainsResult",
    "DowngradeRequest",
    "Instrument",
    "InstrumentView",
    "LiveQuote",
    "MergedInstrument",
    "NewsItem",
    "NewsRequest",
    "NewsResponse",
    "NewsSentiment",
    "PasswordResetConfirm",
    "PasswordResetRequest",
    "PaymentRequestOut",
    "Prediction",
    "PriceRequest",
    "PriceResponse",
    "QuotePayload",
    "QuoteSnapshot",
    "RedeemRequest",
    "RedeemResult",
    "SignInRequest",
    "SignUpRequest",
    "ToggleOutcome",
    "ToggleRequest",
    "ToggleResult",
    "TokenResponse",
    "UpgradeRequest",
]
