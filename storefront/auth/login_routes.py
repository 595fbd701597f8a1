# storefront/auth/login_routes.py
from flask import Blueprint, current_app, jsonify, request
from flask_login import current_user, login_required

from storefront.api.schemas import LoginIn
from storefront.auth.admin import ADMIN_ROLE, check_credentials, issue_token

auth_bp = Blueprint("auth", __name__, url_prefix="/api/auth")


@auth_bp.post("/login")
def login():
    """Exchanges the operator credentials for a bearer token."""
    data = LoginIn.model_validate(request.get_json(silent=True) or {})

    if not check_credentials(data.username, data.password):
        current_app.logger.warning("Failed admin login for %r", data.username)
        return jsonify({"success": False, "error": "Invalid credentials"}), 401

    current_app.logger.info("Admin %s logged in", data.username)
    return jsonify({
        "success": True,
        "role": ADMIN_ROLE,
        "token": issue_token(data.username),
        "expiresIn": current_app.config.get("ADMIN_TOKEN_MAX_AGE"),
    }), 200


@auth_bp.get("/session")
@login_required
def session_info():
    return jsonify({
        "authenticated": True,
        "role": current_user.role,
        "username": current_user.username,
    }), 200
