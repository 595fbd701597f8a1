# storefront/app.py
import logging

from flask import Flask

from storefront.config import Config

# Extensions
from storefront.extensions import db, login_manager, bcrypt, migrate, cors

# Blueprints
from storefront.admin import admin_bp
from storefront.auth import auth_bp
from storefront.api.routes.category_routes import api_categories
from storefront.api.routes.product_routes import api_products
from storefront.api.routes.order_routes import order_bp
from storefront.cli import register_cli
from storefront.errors import register_error_handlers
from storefront import models as _models  # noqa: F401


def create_app(config_object=Config) -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(level=app.config.get("LOG_LEVEL", "INFO"))
    app.logger.setLevel(app.config.get("LOG_LEVEL", "INFO"))

    # Init extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    bcrypt.init_app(app)
    cors.init_app(
        app,
        resources={
            r"/api/*": {
                "origins": app.config.get("CORS_ORIGINS") or [],
                "supports_credentials": True,
            }
        },
    )

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp)
    app.register_blueprint(api_categories)
    app.register_blueprint(api_products)
    app.register_blueprint(order_bp)

    register_error_handlers(app)
    register_cli(app)

    @app.get("/api/health")
    def health():
        return {"ok": True}, 200

    return app
