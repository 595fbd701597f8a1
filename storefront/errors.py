# storefront/errors.py
from __future__ import annotations

from flask import jsonify, current_app
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException

from storefront.extensions import db


class ShopValidationError(Exception):
    """Request data is well-formed but not acceptable (unknown product, stale total...)."""

    def __init__(self, message: str, fields: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.fields = list(fields or [])


class NotificationError(Exception):
    """Outbound chat notification failed."""


def _field_names(exc: ValidationError) -> list[str]:
    names = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        if loc and loc not in names:
            names.append(loc)
    return names


def validation_response(exc: ValidationError, message: str = "Invalid request data"):
    return jsonify({"error": message, "fields": _field_names(exc)}), 400


def register_error_handlers(app) -> None:
    @app.errorhandler(ValidationError)
    def _pydantic_error(exc: ValidationError):
        current_app.logger.info("Validation failed: %s", exc.errors())
        return validation_response(exc)

    @app.errorhandler(ShopValidationError)
    def _shop_error(exc: ShopValidationError):
        current_app.logger.info("Rejected request: %s", exc.message)
        return jsonify({"error": exc.message, "fields": exc.fields}), 400

    @app.errorhandler(HTTPException)
    def _http_error(exc: HTTPException):
        return jsonify({"error": exc.description or exc.name}), exc.code

    @app.errorhandler(Exception)
    def _unexpected(exc: Exception):
        db.session.rollback()
        current_app.logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error"}), 500
