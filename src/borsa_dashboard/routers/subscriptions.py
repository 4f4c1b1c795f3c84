"""Self-service subscription routes: upgrade requests, access codes, downgrades."""
from fastapi import APIRouter, status

from borsa_dashboard.deps import CurrentUser, SubscriptionsDep
from borsa_dashboard.schemas import (AccountOut, DowngradeRequest,
                                     PaymentRequestOut, RedeemRequest,
                                     RedeemResult, UpgradeRequest)

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


@router.post(
    "/requests", response_model=PaymentRequestOut, status_code=status.HTTP_201_CREATED
)
def request_upgrade(
    body: UpgradeRequest, user: CurrentUser, workflow: SubscriptionsDep
) -> PaymentRequestOut:
    """Open a pending payment request; an admin confirms the payment manually."""
    return PaymentRequestOut.model_validate(workflow.request_upgrade(user.id, body.tier))


@router.get("/requests/mine", response_model=list[PaymentRequestOut])
def my_requests(user: CurrentUser, workflow: SubscriptionsDep) -> list[PaymentRequestOut]:
    return [PaymentRequestOut.model_validate(r) for r in workflow.my_requests(user.id)]


@router.post("/redeem", response_model=RedeemResult)
def redeem(body: RedeemRequest, user: CurrentUser, workflow: SubscriptionsDep) -> RedeemResult:
    account = workflow.redeem_code(user.id, body.code)
    return RedeemResult(tier=account.tier, is_admin=account.is_admin)


@router.post("/downgrade", response_model=AccountOut)
def downgrade(body: DowngradeRequest, user: CurrentUser, workflow: SubscriptionsDep) -> AccountOut:
    return AccountOut.from_account(workflow.downgrade(user.id, body.tier))
