"""Checkout blueprint — /api/*

JSON API used by the configurator's preview page.

Routes:
- POST /api/checkout    — start Stripe Checkout for a saved configuration
- GET  /api/csrf-token  — CSRF token for the checkout POST (sent as X-CSRFToken)
"""

import logging

from flask import Blueprint, current_app, jsonify, request
from flask_wtf.csrf import generate_csrf

from caseshop.errors import (
    CONFIGURATION_NOT_FOUND,
    INTERNAL_ERROR,
    INVALID_REQUEST,
    PAYMENT_PROVIDER_ERROR,
    STORAGE_FAILURE,
    UNAUTHENTICATED,
    CheckoutError,
)
from caseshop.extensions import db, limiter
from caseshop.services.checkout_service import create_checkout

logger = logging.getLogger(__name__)

checkout_bp = Blueprint("checkout", __name__, url_prefix="/api")

STATUS_BY_KIND = {
    INVALID_REQUEST: 400,
    UNAUTHENTICATED: 401,
    CONFIGURATION_NOT_FOUND: 404,
    STORAGE_FAILURE: 500,
    PAYMENT_PROVIDER_ERROR: 500,
    INTERNAL_ERROR: 500,
}


# ──────────────────────────────────────────────
# POST /api/checkout
# ──────────────────────────────────────────────

@checkout_bp.route("/checkout", methods=["POST"])
@limiter.limit("10 per minute")
def checkout():
    """Create a Stripe Checkout Session for ``{"configId": ...}``.

    200 {"url": ...} on success, otherwise {"error": ...} with
    400 / 401 / 404 / 500 depending on the failure.
    """
    payload = request.get_json(silent=True)
    config_id = payload.get("configId") if isinstance(payload, dict) else None

    try:
        url, error = create_checkout(
            config_id, current_app.extensions["checkout_settings"]
        )
    except Exception as e:
        logger.error(f"API checkout error: {e}", exc_info=True)
        db.session.rollback()
        url, error = None, CheckoutError(INTERNAL_ERROR, str(e) or "Internal server error")

    if error:
        status = STATUS_BY_KIND.get(error.kind, 500)
        if status >= 500:
            logger.error(f"Checkout failed ({error.kind}): {error.message}")
        else:
            logger.info(f"Checkout rejected ({error.kind}): {error.message}")
        return jsonify({"error": error.message}), status

    return jsonify({"url": url}), 200


# ──────────────────────────────────────────────
# GET /api/csrf-token
# ──────────────────────────────────────────────

@checkout_bp.route("/csrf-token")
def csrf_token():
    return jsonify({"csrfToken": generate_csrf()})
