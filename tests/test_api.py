"""
HTTP API tests through FastAPI's TestClient with overridden container providers
"""
import pytest
from dependency_injector import providers
from fastapi.testclient import TestClient

from borsa_dashboard.container import Container
from borsa_dashboard.db import Category, Database, Tier
from borsa_dashboard.main import create_app
from borsa_dashboard.providers import QuoteProviderABC
from borsa_dashboard.schemas import LiveQuote
from borsa_dashboard.services import AuthService

from conftest import TEST_DATABASE_URL, make_account


class StaticCrypto(QuoteProviderABC):
    category = Category.CRYPTO
    api_name = "Static"

    async def fetch_quotes(self, symbols):
        return [
            LiveQuote(symbol=s, category=self.category, price=100.0, change_pct=1.25,
                      volume=10.0, market_cap=None)
            for s in symbols
        ]


class DownStocks(QuoteProviderABC):
    category = Category.EQUITY
    api_name = "Down"

    async def fetch_quotes(self, symbols):
        raise ConnectionError("upstream unreachable")


@pytest.fixture
def container():
    c = Container()
    c.database.override(providers.Singleton(Database, TEST_DATABASE_URL))
    c.auth_service.override(
        providers.Singleton(AuthService, c.database, secret_key="test", hash_iterations=1_000)
    )
    c.crypto_provider.override(providers.Object(StaticCrypto()))
    c.stocks_provider.override(providers.Object(DownStocks()))
    return c


@pytest.fixture
def client(container):
    with TestClient(create_app(container, start_pollers=False)) as test_client:
        yield test_client


def bearer(client, email, password="secret123"):
    response = client.post("/auth/signin", json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def accounts(container, client):
    """A free user and an admin, with auth headers"""
    db, auth = container.database(), container.auth_service()
    user = make_account(db, auth, "ayse")
    admin = make_account(db, auth, "admin", is_admin=True)
    return {
        "user": (user, bearer(client, user.email)),
        "admin": (admin, bearer(client, admin.email)),
    }


def test_health(client):
    assert client.get("/").json() == {"status": "ok"}


def test_prices_live_wire_shape(client):
    response = client.post("/prices", json={"category": "crypto", "symbols": ["btc", "ETH"]})

    body = response.json()
    assert response.status_code == 200
    assert body["degraded"] is False
    assert "fetchedAt" in body
    assert body["quotes"]["BTC"] == {"price": 100.0, "changePct": 1.25, "volume": 10.0, "marketCap": None}


def test_prices_degraded_when_upstream_down(client):
    response = client.post("/prices", json={"category": "equity", "symbols": ["THYAO"]})

    body = response.json()
    assert response.status_code == 200
    assert body["degraded"] is True
    assert set(body["quotes"]) == {"THYAO"}


def test_prices_validation(client):
    assert client.post("/prices", json={"category": "crypto", "symbols": []}).status_code == 422
    assert client.post("/prices", json={"category": "crypto", "symbols": [" "]}).status_code == 400
    assert client.post("/prices", json={"category": "forex", "symbols": ["EUR"]}).status_code == 422


def test_anonymous_board_is_masked(client):
    response = client.get("/instruments/equity")

    items = response.json()
    assert response.status_code == 200
    assert len(items) == 20
    assert items[0]["symbol"] == "ASELS"
    assert items[0]["prediction"] is None
    assert "sentiment" in items[0]["masked_fields"]
    assert items[0]["prompt"] == "signInRequired"


def test_instrument_lookup(client):
    assert client.get("/instruments/crypto/btc").json()["name"] == "Bitcoin"
    assert client.get("/instruments/equity/BTC").status_code == 404
    assert client.get("/instruments/equity/NOPE").status_code == 404


def test_search_and_entitlements(client):
    assert [i["symbol"] for i in client.get("/instruments/search", params={"q": "aselsan"}).json()] == ["ASELS"]
    entitlements = client.get("/instruments/entitlements").json()
    assert entitlements["wishlist"] == {"visibility": "locked", "prompt": "signInRequired"}


def test_account_lifecycle(client):
    signup = client.post("/auth/signup", json={
        "email": "Deniz@Example.com", "password": "secret123",
        "full_name": "Deniz", "username": "deniz",
    })
    assert signup.status_code == 201
    assert signup.json()["tier"] == "free"

    duplicate = client.post("/auth/signup", json={
        "email": "other@example.com", "password": "secret123",
        "full_name": "Other", "username": "deniz",
    })
    assert duplicate.status_code == 409

    headers = bearer(client, "deniz@example.com")
    assert client.get("/auth/me", headers=headers).json()["username"] == "deniz"

    assert client.post("/auth/signout", headers=headers).status_code == 204
    assert client.get("/auth/me", headers=headers).status_code == 401
    assert client.get("/auth/me").status_code == 401


def test_bad_credentials(client):
    response = client.post("/auth/signin", json={"email": "x@example.com", "password": "nope"})

    assert response.status_code == 401
    assert response.json() == {"detail": "Invalid login credentials"}


def test_upgrade_approval_flow(client, accounts):
    _, user_headers = accounts["user"]
    _, admin_headers = accounts["admin"]

    created = client.post("/subscriptions/requests", json={"tier": "pro"}, headers=user_headers)
    assert created.status_code == 201
    request_id = created.json()["id"]

    assert client.get("/admin/payment-requests", headers=user_headers).status_code == 403
    pending = client.get("/admin/payment-requests", params={"status": "pending"}, headers=admin_headers)
    assert [r["id"] for r in pending.json()] == [request_id]

    approved = client.post(f"/admin/payment-requests/{request_id}/approve", headers=admin_headers)
    assert approved.json()["status"] == "approved"
    again = client.post(f"/admin/payment-requests/{request_id}/reject", headers=admin_headers)
    assert again.status_code == 409
    missing = client.post("/admin/payment-requests/999/approve", headers=admin_headers)
    assert missing.status_code == 404

    me = client.get("/auth/me", headers=user_headers).json()
    assert me["tier"] == "pro"
    board = client.get("/instruments/equity", headers=user_headers).json()
    assert board[0]["prediction"] == "rise"
    mine = client.get("/subscriptions/requests/mine", headers=user_headers).json()
    assert mine[0]["status"] == "approved"


def test_access_code_and_news(client, accounts):
    _, user_headers = accounts["user"]
    _, admin_headers = accounts["admin"]
    news_body = {"symbol": "ASELS", "name": "Aselsan", "category": "equity"}

    anonymous = client.post("/news", json=news_body)
    assert anonymous.status_code == 401
    assert anonymous.json()["prompt"] == "signInRequired"
    locked = client.post("/news", json=news_body, headers=user_headers)
    assert locked.status_code == 403
    assert locked.json()["prompt"] == "upgradeRequired"

    code = client.post("/admin/access-codes", json={"tier": "ultimate"}, headers=admin_headers).json()["code"]
    redeemed = client.post("/subscriptions/redeem", json={"code": code}, headers=user_headers)
    assert redeemed.json()["tier"] == "ultimate"
    reused = client.post("/subscriptions/redeem", json={"code": code}, headers=user_headers)
    assert reused.status_code == 400

    news = client.post("/news", json=news_body, headers=user_headers)
    assert news.status_code == 200
    assert "publishedAt" in news.json()["items"][0]

    downgraded = client.post("/subscriptions/downgrade", json={"tier": "free"}, headers=user_headers)
    assert downgraded.json()["tier"] == "free"
    assert downgraded.json()["is_lifetime"] is False


def test_wishlist_and_notifications(client, accounts):
    _, headers = accounts["user"]

    assert client.post("/wishlist", json={"symbol": "BTC"}).status_code == 401
    assert client.post("/wishlist", json={"symbol": "btc"}, headers=headers).json() == {
        "symbol": "BTC", "outcome": "added"
    }
    assert client.get("/wishlist", headers=headers).json() == ["BTC"]
    assert client.get("/wishlist/BTC", headers=headers).json()["present"] is True
    assert client.get("/notifications/BTC", headers=headers).json()["present"] is False
    assert client.post("/wishlist", json={"symbol": "BTC"}, headers=headers).json()["outcome"] == "removed"
    assert client.post("/notifications", json={"symbol": "NOPE"}, headers=headers).status_code == 404
