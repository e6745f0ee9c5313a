"""Checkout error kinds.

Services never raise these. They return ``(value, CheckoutError | None)``
tuples and the checkout blueprint turns the error kind into an HTTP status
at the edge of the request.
"""

from dataclasses import dataclass

INVALID_REQUEST = "invalid_request"
CONFIGURATION_NOT_FOUND = "configuration_not_found"
UNAUTHENTICATED = "unauthenticated"
STORAGE_FAILURE = "storage_failure"
PAYMENT_PROVIDER_ERROR = "payment_provider_error"
INTERNAL_ERROR = "internal_error"

KINDS = [
    INVALID_REQUEST,
    CONFIGURATION_NOT_FOUND,
    UNAUTHENTICATED,
    STORAGE_FAILURE,
    PAYMENT_PROVIDER_ERROR,
    INTERNAL_ERROR,
]


@dataclass(frozen=True)
class CheckoutError:
    """A classified failure with a message that is safe to show the caller."""

    kind: str
    message: str

    def __post_init__(self):
        if self.kind not in KINDS:
            raise ValueError(f"Unknown checkout error kind: {self.kind}")
