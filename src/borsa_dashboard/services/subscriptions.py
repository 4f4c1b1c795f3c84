"""Subscription workflow: payment requests, access codes and downgrades.

Every state change is a conditional UPDATE evaluated against the row's
current state inside one transaction, so a late approval of an already
rejected request and a second redemption of a used code both fail instead
of silently succeeding.
"""
import logging
import secrets
from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from borsa_dashboard import config
from borsa_dashboard.db import (AccessCode, Database, PaymentRequest,
                                PaymentStatus, Tier, UserAccount)
from borsa_dashboard.errors import (AlreadyResolved, DuplicateValue,
                                    NoSuchPendingRequest, NotAuthorized,
                                    NotFound, ValidationFailed)
from borsa_dashboard.utils import as_utc, utcnow

logger = logging.getLogger(__name__)

INVALID_CODE = "Invalid access code"
CODE_ALREADY_USED = "This access code has already been used"


def lapse_expired_plan(session: Session, account: UserAccount, now: datetime) -> UserAccount:
    """Return the account with a paid plan past its expiry moved back to free.

    Called on every account read so entitlements never outlive the plan,
    independent of when expire_plans() last ran.
    """
    if (
        account.tier == Tier.FREE
        or account.plan_expires_at is None
        or as_utc(account.plan_expires_at) >= now
    ):
        return account
    session.connection().execute(
        update(UserAccount)
        .where(UserAccount.id == account.id, UserAccount.plan_expires_at.is_not(None))
        .values(tier=Tier.FREE, plan_expires_at=None, updated_at=now)
    )
    logger.info("Plan of user %s expired; moved to free", account.id)
    return session.get(UserAccount, account.id, populate_existing=True)


class SubscriptionWorkflow:
    """Moves accounts between free, pro and ultimate."""

    def __init__(
        self,
        db: Database,
        *,
        plan_duration: timedelta | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._db = db
        self._plan_duration = plan_duration or timedelta(days=config.PLAN_DURATION_DAYS)
        self._clock = clock

    # ---- helpers ----
    def _account(self, session: Session, user_id: int) -> UserAccount:
        account = session.get(UserAccount, user_id)
        if account is None:
            raise NotFound(f"Account {user_id} not found")
        return lapse_expired_plan(session, account, self._clock())

    def _admin(self, session: Session, admin_id: int) -> UserAccount:
        admin = session.get(UserAccount, admin_id)
        if admin is None or not admin.is_admin:
            raise NotAuthorized("Admin role required")
        return admin

    @staticmethod
    def _fresh(session: Session, model, key):  # noqa: ANN001, ANN205
        return session.get(model, key, populate_existing=True)

    def get_account(self, user_id: int) -> UserAccount:
        with self._db.session() as session:
            return self._account(session, user_id)

    # ---- payment requests ----
    def request_upgrade(self, user_id: int, tier: Tier) -> PaymentRequest:
        """Open a pending payment request for a paid tier other than the current one."""
        with self._db.session() as session:
            account = self._account(session, user_id)
            if tier == Tier.FREE:
                raise ValidationFailed("The free plan needs no payment; use downgrade instead")
            if tier == account.tier:
                raise ValidationFailed(f"Already on the {tier.value} plan")
            pending = session.exec(
                select(PaymentRequest).where(
                    PaymentRequest.user_id == user_id,
                    PaymentRequest.status == PaymentStatus.PENDING,
                )
            ).first()
            if pending is not None:
                raise DuplicateValue(f"Payment request {pending.id} is already pending")
            request = PaymentRequest(user_id=user_id, requested_tier=tier)
            session.add(request)
            session.flush()
            session.refresh(request)
            logger.info("User %s requested %s (request %s)", user_id, tier.value, request.id)
            return request

    def my_requests(self, user_id: int) -> list[PaymentRequest]:
        with self._db.session() as session:
            stmt = (
                select(PaymentRequest)
                .where(PaymentRequest.user_id == user_id)
                .order_by(PaymentRequest.created_at.desc(), PaymentRequest.id.desc())
            )
            return list(session.exec(stmt).all())

    def list_requests(
        self, admin_id: int, status: PaymentStatus | None = None
    ) -> list[PaymentRequest]:
        with self._db.session() as session:
            self._admin(session, admin_id)
            stmt = select(PaymentRequest).order_by(
                PaymentRequest.created_at.desc(), PaymentRequest.id.desc()
            )
            if status is not None:
                stmt = stmt.where(PaymentRequest.status == status)
            return list(session.exec(stmt).all())

    def _resolve(
        self, session: Session, request_id: int, new_status: PaymentStatus
    ) -> PaymentRequest:
        request = session.get(PaymentRequest, request_id)
        if request is None:
            raise NoSuchPendingRequest(request_id)
        result = session.connection().execute(
            update(PaymentRequest)
            .where(
                PaymentRequest.id == request_id,
                PaymentRequest.status == PaymentStatus.PENDING,
            )
            .values(status=new_status, updated_at=self._clock())
        )
        request = self._fresh(session, PaymentRequest, request_id)
        if result.rowcount != 1:
            raise AlreadyResolved(request_id, request.status.value)
        return request

    def approve(self, admin_id: int, request_id: int) -> PaymentRequest:
        """Approve a pending request and move the requester to the requested tier."""
        with self._db.session() as session:
            self._admin(session, admin_id)
            request = self._resolve(session, request_id, PaymentStatus.APPROVED)
            now = self._clock()
            session.connection().execute(
                update(UserAccount)
                .where(UserAccount.id == request.user_id)
                .values(
                    tier=request.requested_tier,
                    plan_expires_at=now + self._plan_duration,
                    updated_at=now,
                )
            )
            logger.info(
                "Admin %s approved request %s: user %s -> %s",
                admin_id, request_id, request.user_id, request.requested_tier.value,
            )
            return request

    def reject(self, admin_id: int, request_id: int) -> PaymentRequest:
        """Reject a pending request; the requester's tier is unchanged."""
        with self._db.session() as session:
            self._admin(session, admin_id)
            request = self._resolve(session, request_id, PaymentStatus.REJECTED)
            logger.info("Admin %s rejected request %s", admin_id, request_id)
            return request

    # ---- access codes ----
    def create_access_code(
        self,
        admin_id: int,
        tier: Tier,
        *,
        is_admin_grant: bool = False,
        code: str | None = None,
    ) -> AccessCode:
        code = (code or secrets.token_hex(6)).strip().upper()
        try:
            with self._db.session() as session:
                self._admin(session, admin_id)
                access = AccessCode(code=code, tier=tier, is_admin_grant=is_admin_grant)
                session.add(access)
                session.flush()
                session.refresh(access)
        except IntegrityError as exc:
            raise DuplicateValue(f"Access code '{code}' already exists") from exc
        logger.info("Admin %s created access code for %s", admin_id, tier.value)
        return access

    def redeem_code(self, user_id: int, code: str) -> UserAccount:
        """Burn a single-use code and grant its tier (and admin role if flagged).

        The code update and the account update share one transaction: if the
        account cannot be updated the code stays unused.
        """
        code = code.strip().upper()
        if not code:
            raise ValidationFailed("Access code is required")
        with self._db.session() as session:
            self._account(session, user_id)
            now = self._clock()
            conn = session.connection()
            burned = conn.execute(
                update(AccessCode)
                .where(AccessCode.code == code, AccessCode.is_used.is_(False))
                .values(is_used=True, used_by=user_id, used_at=now)
            )
            if burned.rowcount != 1:
                exists = session.exec(select(AccessCode.id).where(AccessCode.code == code)).first()
                raise ValidationFailed(INVALID_CODE if exists is None else CODE_ALREADY_USED)

            access = session.exec(select(AccessCode).where(AccessCode.code == code)).one()
            values = {
                "tier": access.tier,
                "lifetime_code": access.code,
                "plan_expires_at": None,
                "updated_at": now,
            }
            if access.is_admin_grant:
                values["is_admin"] = True
            try:
                conn.execute(update(UserAccount).where(UserAccount.id == user_id).values(**values))
            except SQLAlchemyError:
                logger.exception(
                    "Redeeming %s for user %s failed; code left unused", code, user_id
                )
                raise
            logger.info("User %s redeemed code for %s", user_id, access.tier.value)
            return self._fresh(session, UserAccount, user_id)

    # ---- self-service ----
    def downgrade(self, user_id: int, tier: Tier) -> UserAccount:
        """Move to a strictly lower tier (ultimate -> pro/free, pro -> free)."""
        with self._db.session() as session:
            account = self._account(session, user_id)
            if tier.rank >= account.tier.rank:
                raise ValidationFailed(
                    f"Cannot downgrade from {account.tier.value} to {tier.value}"
                )
            values: dict = {"tier": tier, "updated_at": self._clock()}
            if tier == Tier.FREE:
                values.update(plan_expires_at=None, lifetime_code=None)
            session.connection().execute(
                update(UserAccount).where(UserAccount.id == user_id).values(**values)
            )
            logger.info("User %s downgraded %s -> %s", user_id, account.tier.value, tier.value)
            return self._fresh(session, UserAccount, user_id)

    def expire_plans(self, now: datetime | None = None) -> int:
        """Drop accounts whose paid period ended back to free. Returns how many changed."""
        now = now or self._clock()
        with self._db.session() as session:
            result = session.connection().execute(
                update(UserAccount)
                .where(
                    UserAccount.tier != Tier.FREE,
                    UserAccount.plan_expires_at.is_not(None),
                    UserAccount.plan_expires_at < now,
                )
                .values(tier=Tier.FREE, plan_expires_at=None, updated_at=now)
            )
            if result.rowcount:
                logger.info("Expired %d paid plans", result.rowcount)
            return result.rowcount
