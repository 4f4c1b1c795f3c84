"""Account authentication: sign-up, sign-in, sign-out and password reset.

Sessions are HS256 JWTs carrying the account id and a token id; sign-out
records the token id so the same token is rejected afterwards.
"""
import hashlib
import hmac
import logging
import secrets
import uuid
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import Protocol

from jose import JWTError, jwt
from sqlalchemy import delete
from sqlalchemy.exc import IntegrityError
from sqlmodel import select

from borsa_dashboard import config
from borsa_dashboard.db import Database, RevokedToken, Tier, UserAccount
from borsa_dashboard.errors import (AuthenticationRequired, DuplicateValue,
                                    ValidationFailed)
from borsa_dashboard.schemas import AccountOut
from borsa_dashboard.services.subscriptions import lapse_expired_plan
from borsa_dashboard.utils import as_utc, utcnow

logger = logging.getLogger(__name__)

_HASH_NAME = "sha256"
_ITERATIONS = 260_000


def _epoch(moment: datetime) -> int:
    return int(as_utc(moment).timestamp())


def hash_password(password: str, *, iterations: int = _ITERATIONS) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(_HASH_NAME, password.encode(), salt.encode(), iterations)
    return f"pbkdf2_{_HASH_NAME}${iterations}${salt}${digest.hex()}"


def verify_password(password: str, hashed: str) -> bool:
    try:
        algorithm, iterations, salt, expected = hashed.split("$")
    except ValueError:
        return False
    digest = hashlib.pbkdf2_hmac(
        algorithm.removeprefix("pbkdf2_"), password.encode(), salt.encode(), int(iterations)
    )
    return hmac.compare_digest(digest.hex(), expected)


class ResetCodeSender(Protocol):
    def __call__(self, email: str, code: str) -> None: ...


def log_reset_code(email: str, code: str) -> None:
    """Development sender: no mail integration, the code only reaches the debug log."""
    logger.info("Password reset code issued for %s", email)
    logger.debug("Reset code for %s: %s", email, code)


class AuthService:
    """Credential checks and session tokens over the account store."""

    def __init__(
        self,
        db: Database,
        *,
        secret_key: str = config.SECRET_KEY,
        token_ttl: timedelta | None = None,
        reset_code_ttl: timedelta | None = None,
        send_reset_code: ResetCodeSender = log_reset_code,
        clock: Callable[[], datetime] = utcnow,
        hash_iterations: int = _ITERATIONS,
    ) -> None:
        self._db = db
        self._secret = secret_key
        self._token_ttl = token_ttl or timedelta(minutes=config.TOKEN_TTL_MINUTES)
        self._reset_ttl = reset_code_ttl or timedelta(minutes=config.RESET_CODE_TTL_MINUTES)
        self._send_reset_code = send_reset_code
        self._clock = clock
        self._iterations = hash_iterations

    # ---- accounts ----
    def sign_up(self, email: str, password: str, full_name: str, username: str) -> UserAccount:
        """Create a free account. Username and email must be unused."""
        email = email.strip().lower()
        username = username.strip()
        with self._db.session() as session:
            taken = session.exec(
                select(UserAccount.id).where(UserAccount.username == username)
            ).first()
            if taken is not None:
                raise DuplicateValue("Username already exists. Please choose a different username.")
            if session.exec(select(UserAccount.id).where(UserAccount.email == email)).first():
                raise DuplicateValue("An account with this email already exists")
        account = UserAccount(
            email=email,
            username=username,
            full_name=full_name,
            hashed_password=hash_password(password, iterations=self._iterations),
            tier=Tier.FREE,
        )
        try:
            with self._db.session() as session:
                session.add(account)
                session.flush()
                session.refresh(account)
        except IntegrityError as exc:
            # Lost a race against a concurrent sign-up with the same username or email.
            raise DuplicateValue("Username or email already exists") from exc
        logger.info("Account %s created for %s", account.id, email)
        return account

    def sign_in(self, email: str, password: str) -> str:
        """Check credentials and return a session token."""
        with self._db.session() as session:
            account = session.exec(
                select(UserAccount).where(UserAccount.email == email.strip().lower())
            ).first()
        if account is None or not verify_password(password, account.hashed_password):
            raise AuthenticationRequired("Invalid login credentials")
        return self.issue_token(account.id)

    def issue_token(self, user_id: int) -> str:
        now = self._clock()
        payload = {
            "sub": str(user_id),
            "jti": uuid.uuid4().hex,
            "iat": _epoch(now),
            "exp": _epoch(now + self._token_ttl),
        }
        return jwt.encode(payload, self._secret, algorithm=config.TOKEN_ALGORITHM)

    def _decode(self, token: str) -> dict:
        try:
            # exp is checked against our clock below, not the wall clock.
            return jwt.decode(
                token,
                self._secret,
                algorithms=[config.TOKEN_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError as exc:
            raise AuthenticationRequired("Invalid session token") from exc

    def authenticate(self, token: str) -> UserAccount:
        """Resolve a session token to its account."""
        payload = self._decode(token)
        if payload.get("exp", 0) < _epoch(self._clock()):
            raise AuthenticationRequired("Session expired")
        with self._db.session() as session:
            if session.get(RevokedToken, payload.get("jti", "")) is not None:
                raise AuthenticationRequired("Session signed out")
            account = session.get(UserAccount, int(payload["sub"]))
            if account is None:
                raise AuthenticationRequired("Account no longer exists")
            return lapse_expired_plan(session, account, self._clock())

    def sign_out(self, token: str) -> None:
        """Revoke the token; revocations older than the token lifetime are pruned."""
        payload = self._decode(token)
        now = self._clock()
        with self._db.session() as session:
            session.connection().execute(
                delete(RevokedToken).where(RevokedToken.revoked_at < now - self._token_ttl)
            )
            if session.get(RevokedToken, payload["jti"]) is None:
                session.add(RevokedToken(jti=payload["jti"], revoked_at=now))

    # ---- password reset ----
    def request_password_reset(self, email: str) -> None:
        """Issue a one-time code and send it out of band. Unknown emails are ignored."""
        email = email.strip().lower()
        code = f"{secrets.randbelow(1_000_000):06d}"
        with self._db.session() as session:
            account = session.exec(select(UserAccount).where(UserAccount.email == email)).first()
            if account is None:
                logger.info("Password reset requested for unknown email")
                return
            account.reset_code_hash = hashlib.sha256(code.encode()).hexdigest()
            account.reset_code_expires_at = self._clock() + self._reset_ttl
            session.add(account)
        self._send_reset_code(email, code)

    def confirm_password_reset(self, email: str, code: str, new_password: str) -> None:
        """Set a new password if the code matches and has not expired. The code is single-use."""
        email = email.strip().lower()
        with self._db.session() as session:
            account = session.exec(select(UserAccount).where(UserAccount.email == email)).first()
            if (
                account is None
                or account.reset_code_hash is None
                or account.reset_code_expires_at is None
                or as_utc(account.reset_code_expires_at) < self._clock()
                or not hmac.compare_digest(
                    account.reset_code_hash, hashlib.sha256(code.strip().encode()).hexdigest()
                )
            ):
                raise ValidationFailed("Invalid or expired reset code")
            account.hashed_password = hash_password(new_password, iterations=self._iterations)
            account.reset_code_hash = None
            account.reset_code_expires_at = None
            account.updated_at = self._clock()
            session.add(account)
        logger.info("Password reset completed for %s", email)


TierListener = Callable[[Tier | None], None]


class AuthSession:
    """Current user and tier for one client, with explicit refresh.

    Holds the token between calls the way a browser session survives reloads;
    restore() rebuilds the session from a stored token.
    """

    def __init__(self, auth: AuthService) -> None:
        self._auth = auth
        self.token: str | None = None
        self.account: AccountOut | None = None
        self._listeners: list[TierListener] = []

    @property
    def tier(self) -> Tier | None:
        """None when anonymous."""
        return self.account.tier if self.account else None

    @property
    def signed_in(self) -> bool:
        return self.account is not None

    def subscribe(self, listener: TierListener) -> Callable[[], None]:
        self._listeners.append(listener)
        return lambda: self._listeners.remove(listener) if listener in self._listeners else None

    def _set_account(self, account: AccountOut | None) -> None:
        before = self.tier
        self.account = account
        if self.tier != before:
            for listener in list(self._listeners):
                listener(self.tier)

    def sign_in(self, email: str, password: str) -> AccountOut:
        token = self._auth.sign_in(email, password)
        return self.restore(token)

    def restore(self, token: str) -> AccountOut:
        account = AccountOut.from_account(self._auth.authenticate(token))
        self.token = token
        self._set_account(account)
        return account

    def refresh(self) -> AccountOut | None:
        """Re-read the account (e.g. after an approval) and notify on tier change."""
        if self.token is None:
            return None
        return self.restore(self.token)

    def sign_out(self) -> None:
        if self.token is not None:
            self._auth.sign_out(self.token)
        self.token = None
        self._set_account(None)
