"""Database package: models and session management."""
from borsa_dashboard.db.models import (AccessCode, Category, NotificationEntry,
                                       PaymentRequest, PaymentStatus,
                                       RevokedToken, Tier, UserAccount,
                                       WishlistEntry)
from borsa_dashboard.db.sessions import Database

__all__ = [
    "AccessCode",
    "Category",
    "Database",
    "NotificationEntry",
    "PaymentRequest",
    "PaymentStatus",
    "RevokedToken",
    "Tier",
    "UserAccount",
    "WishlistEntry",
]
