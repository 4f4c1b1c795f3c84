"""
Tests for the subscription workflow: payment requests, access codes, downgrades
"""
import threading
from datetime import timedelta

import pytest

from borsa_dashboard.db import (AccessCode, Database, PaymentStatus, Tier,
                                UserAccount)
from borsa_dashboard.errors import (AlreadyResolved, DuplicateValue,
                                    NoSuchPendingRequest, NotAuthorized,
                                    ValidationFailed)
from borsa_dashboard.services import AuthService, SubscriptionWorkflow
from borsa_dashboard.services.subscriptions import CODE_ALREADY_USED, INVALID_CODE
from borsa_dashboard.utils import as_utc

from conftest import make_account


def test_approve_moves_user_to_requested_tier(workflow, user, admin, clock):
    request = workflow.request_upgrade(user.id, Tier.PRO)
    assert request.status == PaymentStatus.PENDING

    approved = workflow.approve(admin.id, request.id)

    account = workflow.get_account(user.id)
    assert approved.status == PaymentStatus.APPROVED
    assert account.tier == Tier.PRO
    assert as_utc(account.plan_expires_at) == clock.now + timedelta(days=30)


def test_reject_leaves_tier_unchanged(workflow, user, admin):
    request = workflow.request_upgrade(user.id, Tier.ULTIMATE)

    rejected = workflow.reject(admin.id, request.id)

    assert rejected.status == PaymentStatus.REJECTED
    assert workflow.get_account(user.id).tier == Tier.FREE


def test_approve_after_reject_conflicts(workflow, user, admin):
    request = workflow.request_upgrade(user.id, Tier.PRO)
    workflow.reject(admin.id, request.id)

    with pytest.raises(AlreadyResolved) as info:
        workflow.approve(admin.id, request.id)

    assert info.value.status_code == 409
    assert info.value.status == "rejected"
    assert workflow.get_account(user.id).tier == Tier.FREE


def test_unknown_request_is_not_pending(workflow, admin):
    with pytest.raises(NoSuchPendingRequest) as info:
        workflow.approve(admin.id, 999)

    assert info.value.status_code == 404


def test_only_admins_resolve(workflow, user):
    request = workflow.request_upgrade(user.id, Tier.PRO)

    with pytest.raises(NotAuthorized):
        workflow.approve(user.id, request.id)
    with pytest.raises(NotAuthorized):
        workflow.list_requests(user.id)


def test_request_validation(workflow, user):
    with pytest.raises(ValidationFailed):
        workflow.request_upgrade(user.id, Tier.FREE)

    workflow.request_upgrade(user.id, Tier.PRO)
    with pytest.raises(DuplicateValue):
        workflow.request_upgrade(user.id, Tier.ULTIMATE)


def test_request_listing(workflow, user, admin):
    first = workflow.request_upgrade(user.id, Tier.PRO)
    workflow.reject(admin.id, first.id)
    second = workflow.request_upgrade(user.id, Tier.ULTIMATE)

    assert {r.id for r in workflow.my_requests(user.id)} == {first.id, second.id}
    pending = workflow.list_requests(admin.id, PaymentStatus.PENDING)
    assert [r.id for r in pending] == [second.id]


def test_redeem_grants_lifetime_tier(workflow, user, admin):
    access = workflow.create_access_code(admin.id, Tier.ULTIMATE, code="vip-2025")
    assert access.code == "VIP-2025"

    account = workflow.redeem_code(user.id, " vip-2025 ")

    assert account.tier == Tier.ULTIMATE
    assert account.lifetime_code == "VIP-2025"
    assert account.plan_expires_at is None
    assert account.is_admin is False


def test_admin_grant_code_sets_admin(workflow, user, admin):
    workflow.create_access_code(admin.id, Tier.PRO, is_admin_grant=True, code="STAFF1")

    assert workflow.redeem_code(user.id, "STAFF1").is_admin is True


def test_invalid_and_used_codes(db, auth, workflow, user, admin):
    other = make_account(db, auth, "mehmet")
    workflow.create_access_code(admin.id, Tier.PRO, code="ONCE")
    workflow.redeem_code(user.id, "ONCE")

    with pytest.raises(ValidationFailed, match=CODE_ALREADY_USED):
        workflow.redeem_code(other.id, "ONCE")
    with pytest.raises(ValidationFailed, match=INVALID_CODE):
        workflow.redeem_code(other.id, "NEVER")
    assert workflow.get_account(other.id).tier == Tier.FREE


def test_duplicate_code_rejected(workflow, admin):
    workflow.create_access_code(admin.id, Tier.PRO, code="SAME")

    with pytest.raises(DuplicateValue):
        workflow.create_access_code(admin.id, Tier.PRO, code="same")


def test_concurrent_redemption_has_one_winner(tmp_path):
    """Two users redeem the same code at once: exactly one succeeds"""
    db = Database(f"sqlite:///{tmp_path / 'race.db'}")
    db.init_db()
    auth = AuthService(db, secret_key="test", hash_iterations=1_000)
    workflow = SubscriptionWorkflow(db)
    admin = make_account(db, auth, "admin", is_admin=True)
    users = [make_account(db, auth, f"user{i}") for i in range(2)]
    workflow.create_access_code(admin.id, Tier.ULTIMATE, code="RACE")

    barrier = threading.Barrier(len(users))
    outcomes: dict[int, object] = {}

    def redeem(user_id: int) -> None:
        barrier.wait()
        try:
            outcomes[user_id] = workflow.redeem_code(user_id, "RACE").tier
        except ValidationFailed as exc:
            outcomes[user_id] = exc.detail

    threads = [threading.Thread(target=redeem, args=(u.id,)) for u in users]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(outcomes) == 2
    assert set(outcomes.values()) == {Tier.ULTIMATE, CODE_ALREADY_USED}
    with db.session() as session:
        code = session.get(AccessCode, 1)
        upgraded = [session.get(UserAccount, u.id).tier for u in users]
    assert code.is_used
    assert upgraded.count(Tier.ULTIMATE) == 1
    db.dispose()


def test_downgrade_rules(db, auth, workflow):
    account = make_account(db, auth, "zeynep", tier=Tier.ULTIMATE)

    assert workflow.downgrade(account.id, Tier.PRO).tier == Tier.PRO
    with pytest.raises(ValidationFailed):
        workflow.downgrade(account.id, Tier.ULTIMATE)
    with pytest.raises(ValidationFailed):
        workflow.downgrade(account.id, Tier.PRO)

    free = workflow.downgrade(account.id, Tier.FREE)
    assert free.tier == Tier.FREE
    assert free.lifetime_code is None


def test_expire_plans(workflow, user, admin, clock):
    request = workflow.request_upgrade(user.id, Tier.PRO)
    workflow.approve(admin.id, request.id)

    assert workflow.expire_plans() == 0
    clock.advance(days=31)
    assert workflow.expire_plans() == 1
    assert workflow.get_account(user.id).tier == Tier.FREE
