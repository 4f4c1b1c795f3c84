"""Domain exceptions and their HTTP mapping.

Services raise these; main.py registers one handler that turns any
DashboardError into an HTTP response with its status_code and detail.
"""
from fastapi import Request
from fastapi.responses import JSONResponse


class DashboardError(Exception):
    """Base for errors that surface to the user with an explicit message."""

    status_code: int = 400

    def __init__(self, detail: str, *, prompt: str | None = None) -> None:
        super().__init__(detail)
        self.detail = detail
        # UI copy key (e.g. "upgradeRequired") for clients that localize the message.
        self.prompt = prompt


class ValidationFailed(DashboardError):
    """Malformed input, unknown/used access code, bad tier transition."""

    status_code = 400


class DuplicateValue(ValidationFailed):
    """Unique value already taken (username, email)."""

    status_code = 409


class AuthenticationRequired(DashboardError):
    """Missing, expired or revoked session."""

    status_code = 401


class NotAuthorized(DashboardError):
    """Authenticated, but not allowed to perform the action."""

    status_code = 403


class FeatureLocked(NotAuthorized):
    """The caller's tier does not unlock the requested feature."""


class NotFound(DashboardError):
    status_code = 404


class NoSuchPendingRequest(NotFound):
    """Payment request does not exist or is no longer pending."""

    def __init__(self, request_id: int) -> None:
        super().__init__(f"No such pending request: {request_id}")
        self.request_id = request_id


class AlreadyResolved(NoSuchPendingRequest):
    """Payment request already left the pending state."""

    status_code = 409

    def __init__(self, request_id: int, status: str) -> None:
        super().__init__(request_id)
        self.detail = f"Payment request {request_id} already resolved ({status})"
        self.args = (self.detail,)
        self.status = status


class UpstreamError(DashboardError):
    """Price or news provider failed and no fallback was possible."""

    status_code = 502


async def dashboard_error_handler(_: Request, exc: DashboardError) -> JSONResponse:
    """Render a DashboardError as {"detail": ...} (plus "prompt" when set) with its status code."""
    content = {"detail": exc.detail}
    if exc.prompt is not None:
        content["prompt"] = exc.prompt
    return JSONResponse(status_code=exc.status_code, content=content)
