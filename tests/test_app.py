"""App factory wiring: error mapping, CORS and CLI commands."""

from storefront.extensions import bcrypt, db
from storefront.models import Category, Product
from storefront.services import catalog


def test_unexpected_error_is_generic_500(client, monkeypatch):
    def broken():
        raise RuntimeError("database password is hunter2")

    monkeypatch.setattr(catalog, "list_categories", broken)

    resp = client.get("/api/categories")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Internal server error"}


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nothing-here")

    assert resp.status_code == 404
    assert "error" in resp.get_json()


def test_malformed_json_body(client, auth_headers):
    resp = client.post(
        "/api/products",
        data="{not json",
        content_type="application/json",
        headers=auth_headers,
    )
    assert resp.status_code == 400


def test_cors_for_storefront_origin(client):
    resp = client.get("/api/products", headers={"Origin": "http://localhost:5173"})
    assert resp.headers.get("Access-Control-Allow-Origin") == "http://localhost:5173"


def test_health(client):
    assert client.get("/api/health").get_json() == {"ok": True}


def test_cli_seed_demo(app):
    runner = app.test_cli_runner()

    result = runner.invoke(args=["seed-demo"])

    assert result.exit_code == 0
    assert Category.query.count() == 2
    assert Product.query.count() == 3

    again = runner.invoke(args=["seed-demo"])
    assert "not empty" in again.output
    assert Product.query.count() == 3


def test_cli_hash_password(app):
    result = app.test_cli_runner().invoke(args=["hash-password", "--password", "pw"])

    assert result.exit_code == 0
    assert bcrypt.check_password_hash(result.output.strip(), "pw")


def test_cli_init_db(app):
    db.drop_all()
    result = app.test_cli_runner().invoke(args=["init-db"])

    assert result.exit_code == 0
    assert Category.query.count() == 0
