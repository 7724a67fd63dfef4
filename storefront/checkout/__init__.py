"""Checkout: card session requests, hosted redirect flow, wallet buttons."""
from .card import CardCheckoutController, CardRedirect, CheckoutControl, complete_checkout
from .session import CheckoutSessionRequester, build_session_payload
from .wallet import (
    PaymentOutcome,
    WalletButtons,
    WalletButtonsHandle,
    WalletCallbacks,
    WalletCheckoutAdapter,
    build_order,
)

__all__ = [
    "CardCheckoutController",
    "CardRedirect",
    "CheckoutControl",
    "CheckoutSessionRequester",
    "PaymentOutcome",
    "WalletButtons",
    "WalletButtonsHandle",
    "WalletCallbacks",
    "WalletCheckoutAdapter",
    "build_order",
    "build_session_payload",
    "complete_checkout",
]
