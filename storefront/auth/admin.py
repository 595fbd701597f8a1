# storefront/auth/admin.py
"""
Single static operator account.

There is no user table: the credentials live in the config. A successful
login hands out a signed, time-limited token which the client sends back as
``Authorization: Bearer <token>``; Flask-Login's request loader turns a
valid token into an ``AdminUser`` on every admin request.
"""
from __future__ import annotations

import hmac

from flask import current_app
from flask_login import UserMixin
from itsdangerous import BadData, SignatureExpired, URLSafeTimedSerializer

from storefront.extensions import bcrypt

ADMIN_ROLE = "admin"


class AdminUser(UserMixin):
    role = ADMIN_ROLE

    def __init__(self, username: str):
        self.username = username

    def get_id(self):
        return self.username

    def __repr__(self):
        return f"<AdminUser {self.username}>"


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(
        current_app.config["SECRET_KEY"],
        salt=current_app.config.get("ADMIN_TOKEN_SALT", "storefront-admin"),
    )


def _same(a: str, b: str) -> bool:
    return hmac.compare_digest((a or "").encode("utf-8"), (b or "").encode("utf-8"))


def check_credentials(username: str, password: str) -> bool:
    cfg = current_app.config
    expected_user = cfg.get("ADMIN_USERNAME")
    if not expected_user or not _same(username, expected_user):
        return False

    hashed = cfg.get("ADMIN_PASSWORD_HASH")
    if hashed:
        try:
            return bcrypt.check_password_hash(hashed, password)
        except ValueError:
            current_app.logger.error("ADMIN_PASSWORD_HASH is not a valid bcrypt hash")
            return False

    expected_password = cfg.get("ADMIN_PASSWORD")
    if not expected_password:
        current_app.logger.warning("ADMIN_PASSWORD is not configured, admin login disabled")
        return False
    return _same(password, expected_password)


def issue_token(username: str) -> str:
    return _serializer().dumps({"u": username, "r": ADMIN_ROLE})


def verify_token(token: str) -> AdminUser | None:
    max_age = current_app.config.get("ADMIN_TOKEN_MAX_AGE", 12 * 60 * 60)
    try:
        data = _serializer().loads(token, max_age=max_age)
    except SignatureExpired:
        current_app.logger.info("Admin token expired")
        return None
    except BadData:
        return None

    username = data.get("u") if isinstance(data, dict) else None
    if not username or not _same(username, current_app.config.get("ADMIN_USERNAME")):
        return None
    return AdminUser(username)


def admin_from_request(request) -> AdminUser | None:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return verify_token(token.strip())
