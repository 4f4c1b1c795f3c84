"""Account-side schemas: auth payloads, subscription workflow and user content."""
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field

from borsa_dashboard.db import PaymentStatus, Tier


class SignUpRequest(BaseModel):
    email: str = Field(min_length=3, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    password: str = Field(min_length=6)
    full_name: str
    username: str = Field(min_length=3, max_length=32)


class SignInRequest(BaseModel):
    email: str
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class PasswordResetRequest(BaseModel):
    email: str


class PasswordResetConfirm(BaseModel):
    email: str
    code: str
    new_password: str = Field(min_length=6)


class AccountOut(BaseModel):
    """Public view of a UserAccount (no password material)."""

    model_config = {"from_attributes": True}

    id: int
    email: str
    username: str
    full_name: str | None = None
    tier: Tier
    plan_expires_at: datetime | None = None
    is_admin: bool = False
    is_lifetime: bool = False

    @classmethod
    def from_account(cls, account) -> "AccountOut":
        return cls(
            id=account.id,
            email=account.email,
            username=account.username,
            full_name=account.full_name,
            tier=account.tier,
            plan_expires_at=account.plan_expires_at,
            is_admin=account.is_admin,
            is_lifetime=account.lifetime_code is not None,
        )


class UpgradeRequest(BaseModel):
    tier: Tier


class PaymentRequestOut(BaseModel):
    model_config = {"from_attributes": True}

    id: int
    user_id: int
    requested_tier: Tier
    status: PaymentStatus
    created_at: datetime
    updated_at: datetime


class RedeemRequest(BaseModel):
    code: str = Field(min_length=1)


class RedeemResult(BaseModel):
    tier: Tier
    is_admin: bool
    message: str = "Access code redeemed successfully"


class DowngradeRequest(BaseModel):
    tier: Tier


class AccessCodeIn(BaseModel):
    tier: Tier
    is_admin_grant: bool = False
    code: str | None = None


class AccessCodeOut(BaseModel):
    model_config = {"from_attributes": True}

    code: str
    tier: Tier
    is_admin_grant: bool
    is_used: bool
    used_by: int | None = None
    used_at: datetime | None = None


class ToggleOutcome(str, Enum):
    ADDED = "added"
    REMOVED = "removed"


class ToggleRequest(BaseModel):
    symbol: str = Field(min_length=1)


class ToggleResult(BaseModel):
    symbol: str
    outcome: ToggleOutcome


class ContainsResult(BaseModel):
    symbol: str
    present: bool
