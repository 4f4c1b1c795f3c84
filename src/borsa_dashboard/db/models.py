"""Database models for the dashboard service.

Only account and per-user state is persisted. Instruments come from the
static catalog and live quotes are fetched on demand; neither is stored.
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel

from borsa_dashboard.utils import utcnow


class Category(str, Enum):
    """Instrument category; also the price-feed discriminator."""

    EQUITY = "equity"
    CRYPTO = "crypto"


class Tier(str, Enum):
    """Subscription tier, ordered free < pro < ultimate."""

    FREE = "free"
    PRO = "pro"
    ULTIMATE = "ultimate"

    @property
    def rank(self) -> int:
        return _TIER_RANK[self]


_TIER_RANK = {Tier.FREE: 0, Tier.PRO: 1, Tier.ULTIMATE: 2}


class PaymentStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class UserAccount(SQLModel, table=True):
    """User account. Tier and admin flag change only through the subscription workflow."""

    __tablename__ = "user_account"

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    username: str = Field(unique=True, index=True)
    full_name: str | None = None
    hashed_password: str
    tier: Tier = Field(default=Tier.FREE)
    plan_expires_at: datetime | None = None
    lifetime_code: str | None = None
    is_admin: bool = Field(default=False)
    reset_code_hash: str | None = None
    reset_code_expires_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class PaymentRequest(SQLModel, table=True):
    """Manual payment request; terminal once approved or rejected."""

    __tablename__ = "payment_request"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user_account.id", index=True)
    requested_tier: Tier
    status: PaymentStatus = Field(default=PaymentStatus.PENDING, index=True)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class AccessCode(SQLModel, table=True):
    """Single-use code granting a tier (and optionally admin) directly."""

    __tablename__ = "access_code"

    id: int | None = Field(default=None, primary_key=True)
    code: str = Field(unique=True, index=True)
    tier: Tier
    is_admin_grant: bool = Field(default=False)
    is_used: bool = Field(default=False)
    used_by: int | None = Field(default=None, foreign_key="user_account.id")
    used_at: datetime | None = None
    created_at: datetime = Field(default_factory=utcnow)


class WishlistEntry(SQLModel, table=True):
    """Instrument a user follows."""

    __tablename__ = "wishlist"
    __table_args__ = (UniqueConstraint("user_id", "symbol"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user_account.id", index=True)
    symbol: str
    created_at: datetime = Field(default_factory=utcnow)


class NotificationEntry(SQLModel, table=True):
    """Instrument a user wants price notifications for."""

    __tablename__ = "notification"
    __table_args__ = (UniqueConstraint("user_id", "symbol"),)

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user_account.id", index=True)
    symbol: str
    created_at: datetime = Field(default_factory=utcnow)


class RevokedToken(SQLModel, table=True):
    """Session token ids invalidated by sign-out."""

    __tablename__ = "revoked_token"

    jti: str = Field(primary_key=True)
    revoked_at: datetime = Field(default_factory=utcnow)
