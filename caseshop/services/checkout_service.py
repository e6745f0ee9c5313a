"""Checkout service — turns a saved configuration into a Stripe Checkout URL.

Steps, in order, stopping at the first failure:
1. Validate the configuration id
2. Load the configuration
3. Resolve the signed-in identity
4. Provision the local user
5. Price the configuration
6. Get or create the order (idempotent per user + configuration)
7. Create a one-time Stripe Product priced at the computed amount
8. Create a Stripe Checkout Session for that product
9. Return the session URL

Nothing is retried here. The caller can resubmit, and the order ledger makes
the resubmission land on the same order.
"""

import logging
from dataclasses import dataclass, field

import stripe
from sqlalchemy.exc import SQLAlchemyError

from caseshop.errors import (
    INVALID_REQUEST,
    PAYMENT_PROVIDER_ERROR,
    STORAGE_FAILURE,
    UNAUTHENTICATED,
    CheckoutError,
)
from caseshop.extensions import db
from caseshop.services.configuration_service import get_configuration
from caseshop.services.identity_service import get_current_identity
from caseshop.services.order_service import get_or_create_order
from caseshop.services.pricing_service import (
    PricingRules,
    calculate_price,
    to_currency_units,
)
from caseshop.services.user_service import ensure_user

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CheckoutSettings:
    stripe_secret_key: str
    base_url: str
    currency: str = "usd"
    product_name: str = "Custom iPhone Case"
    shipping_countries: tuple = ("DE", "US")
    pricing: PricingRules = field(default_factory=PricingRules)

    @classmethod
    def from_config(cls, app_config):
        return cls(
            stripe_secret_key=app_config["STRIPE_SECRET_KEY"],
            base_url=app_config["APP_BASE_URL"].rstrip("/"),
            currency=app_config["CHECKOUT_CURRENCY"],
            product_name=app_config["CHECKOUT_PRODUCT_NAME"],
            shipping_countries=tuple(app_config["SHIPPING_COUNTRIES"]),
            pricing=PricingRules.from_config(app_config),
        )


# ──────────────────────────────────────────────
# Stripe calls
# ──────────────────────────────────────────────

def _create_stripe_session(configuration, order, user_id, price, settings):
    """Register the case as a one-time Product and open a Checkout Session.

    Returns the Stripe checkout session URL.
    Raises stripe.StripeError on API failures.
    """
    stripe.api_key = settings.stripe_secret_key

    product = stripe.Product.create(
        name=settings.product_name,
        images=[configuration.image_url],
        default_price_data={
            "currency": settings.currency,
            "unit_amount": price,
        },
    )

    session = stripe.checkout.Session.create(
        mode="payment",
        success_url=f"{settings.base_url}/thank-you?orderId={order.id}",
        cancel_url=f"{settings.base_url}/configure/preview?id={configuration.id}",
        payment_method_types=["card"],
        shipping_address_collection={
            "allowed_countries": list(settings.shipping_countries),
        },
        metadata={
            "userId": user_id,
            "orderId": order.id,
        },
        line_items=[{"price": product.default_price, "quantity": 1}],
    )

    logger.info(f"Stripe checkout session {session.id} created for order {order.id}")
    return session.url


# ──────────────────────────────────────────────
# Checkout
# ──────────────────────────────────────────────

def create_checkout(configuration_id, settings):
    """Run the checkout flow for the signed-in caller.

    Args:
        configuration_id: The ``configId`` from the request body (unvalidated)
        settings: CheckoutSettings built from the app config

    Returns:
        tuple: (url, error)
            - On success: (checkout session URL, None)
            - On failure: (None, CheckoutError)
    """
    if not configuration_id or not isinstance(configuration_id, str):
        return None, CheckoutError(INVALID_REQUEST, "Missing or invalid configId")

    try:
        configuration, error = get_configuration(configuration_id)
    except SQLAlchemyError as e:
        logger.error(f"Configuration lookup failed for {configuration_id}: {e}", exc_info=True)
        db.session.rollback()
        return None, CheckoutError(STORAGE_FAILURE, "Could not load configuration")
    if error:
        return None, error

    identity = get_current_identity()
    if identity is None:
        return None, CheckoutError(UNAUTHENTICATED, "You need to be logged in")

    user, error = ensure_user(identity)
    if error:
        return None, error

    price = calculate_price(configuration.finish, configuration.material, settings.pricing)

    try:
        order, _ = get_or_create_order(
            user.id, configuration.id, to_currency_units(price)
        )
    except SQLAlchemyError as e:
        logger.error(f"Order ledger failed for user={user.id}: {e}", exc_info=True)
        db.session.rollback()
        return None, CheckoutError(STORAGE_FAILURE, "Could not save order")

    try:
        url = _create_stripe_session(configuration, order, user.id, price, settings)
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout failed for order {order.id}: {e}", exc_info=True)
        message = getattr(e, "user_message", None) or str(e) or "Payment provider error"
        return None, CheckoutError(PAYMENT_PROVIDER_ERROR, message)

    return url, None
