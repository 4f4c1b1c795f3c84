"""Account routes: sign-up, sign-in, sign-out and password reset."""
from fastapi import APIRouter, status

from borsa_dashboard.deps import AuthServiceDep, CurrentUser, TokenDep
from borsa_dashboard.schemas import (AccountOut, PasswordResetConfirm,
                                     PasswordResetRequest, SignInRequest,
                                     SignUpRequest, TokenResponse)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=AccountOut, status_code=status.HTTP_201_CREATED)
def sign_up(body: SignUpRequest, auth: AuthServiceDep) -> AccountOut:
    account = auth.sign_up(body.email, body.password, body.full_name, body.username)
    return AccountOut.from_account(account)


@router.post("/signin", response_model=TokenResponse)
def sign_in(body: SignInRequest, auth: AuthServiceDep) -> TokenResponse:
    return TokenResponse(access_token=auth.sign_in(body.email, body.password))


@router.post("/signout", status_code=status.HTTP_204_NO_CONTENT)
def sign_out(token: TokenDep, auth: AuthServiceDep) -> None:
    auth.sign_out(token)


@router.get("/me", response_model=AccountOut)
def me(user: CurrentUser) -> AccountOut:
    return AccountOut.from_account(user)


@router.post("/password-reset", status_code=status.HTTP_202_ACCEPTED)
def request_password_reset(body: PasswordResetRequest, auth: AuthServiceDep) -> dict[str, str]:
    """Send a one-time code. The response is the same whether or not the email exists."""
    auth.request_password_reset(body.email)
    return {"status": "sent"}


@router.post("/password-reset/confirm")
def confirm_password_reset(body: PasswordResetConfirm, auth: AuthServiceDep) -> dict[str, str]:
    auth.confirm_password_reset(body.email, body.code, body.new_password)
    return {"status": "updated"}
