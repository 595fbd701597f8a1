# storefront/cli.py
from decimal import Decimal

import click

from storefront.extensions import bcrypt, db


def register_cli(app):
    @app.cli.command("init-db")
    def init_db():
        """Create all tables (for a fresh database without migrations)."""
        db.create_all()
        click.echo("✅ Tables created")

    @app.cli.command("hash-password")
    @click.option("--password", default=None, help="Password (prompted when omitted)")
    def hash_password(password: str | None):
        """Print a bcrypt hash usable as ADMIN_PASSWORD_HASH."""
        if not password:
            password = click.prompt("Password", hide_input=True, confirmation_prompt=True)
        click.echo(bcrypt.generate_password_hash(password).decode("utf-8"))

    @app.cli.command("seed-demo")
    @click.option("--force", is_flag=True, default=False, help="Seed even if products exist")
    def seed_demo(force: bool):
        """A couple of categories and products for local development."""
        from storefront.models import Product
        from storefront.services import catalog

        db.create_all()
        if Product.query.count() and not force:
            click.echo("❗ Catalog is not empty. Use --force to seed anyway.")
            return

        phones = catalog.create_category({"name": "Phones", "name_ru": "Телефоны", "name_he": "טלפונים"})
        audio = catalog.create_category({"name": "Audio", "name_ru": "Аудио", "name_he": "אודיו"})

        demo = [
            ("Galaxy A55", "6.6\" AMOLED, 128 GB", "1499.00", phones, "Samsung", 10),
            ("Redmi Note 13", "6.67\" AMOLED, 256 GB", "899.00", phones, "Xiaomi", 0),
            ("Buds Pro", "Wireless earbuds with ANC", "349.90", audio, "Samsung", None),
        ]
        for name, description, price, category, brand, stock in demo:
            catalog.create_product({
                "name": name,
                "description": description,
                "price": Decimal(price),
                "category_id": category.id,
                "brand": brand,
                "stock": stock,
            })
        click.echo(f"✅ Seeded {len(demo)} products")
