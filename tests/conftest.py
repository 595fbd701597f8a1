from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from sqlalchemy.pool import StaticPool

from storefront.app import create_app
from storefront.config import Config
from storefront.extensions import db
from storefront.services import catalog

ADMIN_USERNAME = "operator"
ADMIN_PASSWORD = "s3cret-Pa55!"

ORDER_FIELDS = {
    "customer_name": "Dana Levi",
    "customer_phone": "0501234567",
    "customer_city": "haifa",
    "customer_address": "Herzl St 10, apt 4",
    "notes": "",
}


class ConfigForTests(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {
        "connect_args": {"check_same_thread": False},
        "poolclass": StaticPool,
    }
    ADMIN_USERNAME = ADMIN_USERNAME
    ADMIN_PASSWORD = ADMIN_PASSWORD
    ADMIN_PASSWORD_HASH = None
    ADMIN_TOKEN_MAX_AGE = 3600
    TELEGRAM_BOT_TOKEN = None
    TELEGRAM_CHAT_ID = None
    DELIVERY_FEE = "25.00"
    CURRENCY_SYMBOL = "₪"
    CORS_ORIGINS = ["http://localhost:5173"]


@pytest.fixture()
def app():
    app = create_app(ConfigForTests)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def auth_headers(client):
    resp = client.post(
        "/api/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200
    return {"Authorization": f"Bearer {resp.get_json()['token']}"}


@pytest.fixture()
def make_category(app):
    def _make(name="Phones", **fields):
        return catalog.create_category({"name": name, **fields})

    return _make


@pytest.fixture()
def make_product(app, make_category):
    # explicit timestamps so "newest first" is deterministic
    clock = {"now": datetime(2024, 1, 1, 12, 0, 0)}
    default_category = {}

    def _make(name="Galaxy A55", price="100.00", category=None, **fields):
        if category is None:
            if "cat" not in default_category:
                default_category["cat"] = make_category("Default")
            category = default_category["cat"]
        clock["now"] += timedelta(minutes=1)
        data = {
            "name": name,
            "description": fields.pop("description", f"{name} description"),
            "price": Decimal(price),
            "category_id": category.id,
            "created_at": clock["now"],
        }
        data.update(fields)
        return catalog.create_product(data)

    return _make


class _FakeResponse:
    def __init__(self, body: bytes):
        self._body = body

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


@pytest.fixture()
def telegram(app, monkeypatch):
    """Configures a bot token and records what would be posted to Telegram."""
    app.config["TELEGRAM_BOT_TOKEN"] = "123:test-token"
    app.config["TELEGRAM_CHAT_ID"] = "@shop_orders"

    state = {"requests": [], "body": b'{"ok": true, "result": {}}', "error": None}

    def fake_urlopen(req, timeout=None):
        state["requests"].append(req)
        if state["error"] is not None:
            raise state["error"]
        return _FakeResponse(state["body"])

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    return state


@pytest.fixture()
def admin_credentials():
    return {"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD}


@pytest.fixture()
def order_fields():
    return dict(ORDER_FIELDS)


@pytest.fixture()
def order_payload():
    """Builds the body the checkout page posts to /api/orders."""

    def _payload(lines, total=None, **order):
        body = {
            "order": {
                "customerName": ORDER_FIELDS["customer_name"],
                "customerPhone": ORDER_FIELDS["customer_phone"],
                "customerCity": ORDER_FIELDS["customer_city"],
                "customerAddress": ORDER_FIELDS["customer_address"],
                "notes": "",
                "status": "pending",
                **order,
            },
            "items": [
                {"productId": p.id, "quantity": qty, "price": str(p.price)}
                for p, qty in lines
            ],
        }
        if total is not None:
            body["order"]["totalAmount"] = total
        return body

    return _payload
