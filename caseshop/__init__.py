import os
import logging

import click
from flask import Flask, jsonify
from flask_wtf.csrf import CSRFError

from caseshop.config import config_by_name
from caseshop.extensions import db, migrate, login_manager, csrf, limiter


def create_app(config_name=None):
    """Application factory."""

    if config_name is None:
        config_name = os.environ.get("FLASK_ENV", "development")

    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # --- Validate required env vars (skip in testing) ---
    if config_name != "testing":
        try:
            config_by_name[config_name].validate()
        except RuntimeError as e:
            app.logger.warning(f"Config validation: {e}")

    # --- Init extensions ---
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)

    # --- Import models so Alembic can discover them ---
    with app.app_context():
        from caseshop import models  # noqa: F401

    # --- Checkout settings, read once from config ---
    from caseshop.services.checkout_service import CheckoutSettings
    app.extensions["checkout_settings"] = CheckoutSettings.from_config(app.config)

    # --- Register blueprints ---
    from caseshop.blueprints.checkout import checkout_bp

    app.register_blueprint(checkout_bp)

    # --- Health check ---
    @app.route("/health")
    def health():
        return jsonify({"status": "ok"})

    # --- Error handlers (JSON API, no templates) ---
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(CSRFError)
    def csrf_failed(e):
        return jsonify({"error": e.description}), 400

    @app.errorhandler(429)
    def rate_limited(e):
        return jsonify({"error": "Too many requests"}), 429

    @app.errorhandler(500)
    def server_error(e):
        return jsonify({"error": "Internal server error"}), 500

    # --- CLI commands ---
    register_cli(app)

    # --- Security headers ---
    @app.after_request
    def add_security_headers(response):
        """Add security headers to every response."""
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        # JSON only: nothing here should ever be rendered as a page
        response.headers["Content-Security-Policy"] = (
            "default-src 'none'; frame-ancestors 'none';"
        )
        if not app.debug:
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response

    # --- Logging ---
    if not app.debug:
        logging.basicConfig(level=logging.INFO)

    return app


def register_cli(app):
    """Register custom CLI commands with the Flask app."""

    from caseshop.models.configuration import Configuration

    @app.cli.command("seed-configuration")
    @click.option(
        "--finish", type=click.Choice(Configuration.FINISHES), default="plain"
    )
    @click.option(
        "--material", type=click.Choice(Configuration.MATERIALS), default="silicone"
    )
    @click.option(
        "--image-url",
        default="https://example.com/case-artwork.png",
        help="Public URL of the case artwork (shown on the Stripe checkout page)",
    )
    def seed_configuration(finish, material, image_url):
        """Create a saved configuration for local checkout testing.

        Usage:
            flask seed-configuration
            flask seed-configuration --finish textured --material polycarbonate
        """
        configuration = Configuration(
            finish=finish,
            material=material,
            image_url=image_url,
        )
        db.session.add(configuration)
        db.session.commit()

        click.echo(f"Created configuration: {configuration.id}")
        click.echo(f"  Finish:    {finish}")
        click.echo(f"  Material:  {material}")
        click.echo(f"  Preview:   {app.config['APP_BASE_URL']}/configure/preview?id={configuration.id}")

    @app.cli.command("show-price")
    @click.option(
        "--finish", type=click.Choice(Configuration.FINISHES), default="plain"
    )
    @click.option(
        "--material", type=click.Choice(Configuration.MATERIALS), default="silicone"
    )
    def show_price(finish, material):
        """Print the price a finish/material pair would be charged."""
        from caseshop.services.pricing_service import (
            calculate_price,
            to_currency_units,
        )

        rules = app.extensions["checkout_settings"].pricing
        price = calculate_price(finish, material, rules)
        currency = app.config["CHECKOUT_CURRENCY"].upper()
        click.echo(f"{finish}/{material}: {price} cents ({to_currency_units(price)} {currency})")
