"""Configuration lookup for checkout. Read-only."""

from caseshop.errors import CONFIGURATION_NOT_FOUND, CheckoutError
from caseshop.extensions import db
from caseshop.models.configuration import Configuration


def get_configuration(configuration_id):
    """Load a saved configuration by id.

    Returns:
        tuple: (configuration, error)
            - If found: (Configuration, None)
            - If missing: (None, CheckoutError)
    """
    configuration = db.session.get(Configuration, configuration_id)
    if configuration is None:
        return None, CheckoutError(
            CONFIGURATION_NOT_FOUND, "No such configuration found"
        )
    return configuration, None
