"""
Common Error and Message Constants

Centralized error and user-facing message strings, plus the exception types
raised by the checkout layer.
"""
from typing import Optional

# Cart notifications
MSG_ITEM_ADDED = "{name} added to cart!"
MSG_ITEM_REMOVED = "{name} removed from cart."
MSG_CART_CLEARED = "Cart cleared."
MSG_CART_EMPTY = "Your cart is empty."
MSG_CART_COUNT = "{count} item{suffix} in cart"

# Card checkout
MSG_CARD_NOT_CONFIGURED = (
    "Card checkout isn't configured yet. Please choose PayPal or contact us to complete your order."
)
MSG_CARD_RETRY = "We couldn't start the card checkout. Please try again later or choose PayPal."
LABEL_CARD_READY = "Pay with Card"
LABEL_CARD_UNAVAILABLE = "Card checkout unavailable"
LABEL_CARD_REDIRECTING = "Redirecting..."

# Wallet checkout
MSG_WALLET_UNAVAILABLE = "PayPal checkout is unavailable right now."
MSG_WALLET_APPROVED = "Payment received! Thank you."
MSG_WALLET_CANCELLED = "PayPal checkout cancelled."
MSG_WALLET_RETRY = "We couldn't complete the PayPal payment. Please try again."

# API errors
ERROR_EMPTY_CART = "Cart is empty"
ERROR_CHECKOUT_NOT_CONFIGURED = "Card checkout is not configured"
ERROR_PAYMENT_FAILED = "Payment failed"


class StorefrontError(Exception):
    """Base class for storefront errors."""


class CheckoutSessionError(StorefrontError):
    """The session creation endpoint did not return a usable session."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PaymentProviderError(StorefrontError):
    """A payment provider capability reported a failure."""


class CheckoutNotConfiguredError(StorefrontError):
    """Card checkout credentials are missing."""
