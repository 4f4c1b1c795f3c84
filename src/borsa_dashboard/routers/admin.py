"""Admin routes: payment request review and access code issuance."""
from fastapi import APIRouter

from borsa_dashboard.db import PaymentStatus
from borsa_dashboard.deps import AdminUser, SubscriptionsDep
from borsa_dashboard.schemas import (AccessCodeIn, AccessCodeOut,
                                     PaymentRequestOut)

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/payment-requests", response_model=list[PaymentRequestOut])
def list_payment_requests(
    admin: AdminUser, workflow: SubscriptionsDep, status: PaymentStatus | None = None
) -> list[PaymentRequestOut]:
    """All payment requests, newest first; filter with ?status=pending."""
    return [PaymentRequestOut.model_validate(r) for r in workflow.list_requests(admin.id, status)]


@router.post("/payment-requests/{request_id}/approve", response_model=PaymentRequestOut)
def approve(request_id: int, admin: AdminUser, workflow: SubscriptionsDep) -> PaymentRequestOut:
    return PaymentRequestOut.model_validate(workflow.approve(admin.id, request_id))


@router.post("/payment-requests/{request_id}/reject", response_model=PaymentRequestOut)
def reject(request_id: int, admin: AdminUser, workflow: SubscriptionsDep) -> PaymentRequestOut:
    return PaymentRequestOut.model_validate(workflow.reject(admin.id, request_id))


@router.post(
    "/access-codes", response_model=AccessCodeOut, status_code=201
)
def create_access_code(
    body: AccessCodeIn, admin: AdminUser, workflow: SubscriptionsDep
) -> AccessCodeOut:
    access = workflow.create_access_code(
        admin.id, body.tier, is_admin_grant=body.is_admin_grant, code=body.code
    )
    return AccessCodeOut.model_validate(access)
