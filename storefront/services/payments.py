"""Card checkout session service (Stripe hosted checkout)."""
import asyncio
from typing import Any, Dict, Iterable, List, Optional, Protocol

import stripe

from storefront.config import Settings, get_settings
from storefront.errors import CheckoutNotConfiguredError, PaymentProviderError
from storefront.logging import get_logger
from storefront.services.money import to_cents

logger = get_logger(__name__)


class SessionLineItem(Protocol):
    name: str
    price: Any
    quantity: int


def build_line_items(items: Iterable[SessionLineItem], currency: str = "usd") -> List[Dict[str, Any]]:
    """Convert cart items to Stripe Checkout line_items (amounts in cents)."""
    return [
        {
            "price_data": {
                "currency": currency,
                "product_data": {"name": item.name},
                "unit_amount": to_cents(item.price),
            },
            "quantity": item.quantity,
        }
        for item in items
    ]


class CheckoutSessionService:
    """Creates hosted card checkout sessions. Stateless apart from settings."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _validate_config(self) -> str:
        if not self.settings.is_card_checkout_configured():
            logger.error("Card checkout not configured. Missing: STRIPE_SECRET_KEY")
            raise CheckoutNotConfiguredError("STRIPE_SECRET_KEY is not set")
        return self.settings.stripe_secret_key

    def create_session(self, items: List[SessionLineItem]) -> str:
        """
        Create a Stripe Checkout session and return its id.

        Raises:
            ValueError: no items
            CheckoutNotConfiguredError: secret key missing
            PaymentProviderError: Stripe rejected the request
        """
        if not items:
            raise ValueError("Cart is empty")

        api_key = self._validate_config()
        line_items = build_line_items(items, self.settings.currency)

        try:
            session = stripe.checkout.Session.create(
                api_key=api_key,
                payment_method_types=["card"],
                line_items=line_items,
                mode="payment",
                success_url=self.settings.success_url,
                cancel_url=self.settings.cancel_url,
            )
        except stripe.StripeError as e:
            logger.error(f"Stripe checkout session creation failed: {e}")
            raise PaymentProviderError(str(e)) from e

        logger.info(f"Checkout session created for {len(line_items)} line item(s)")
        return session.id

    async def create_session_async(self, items: List[SessionLineItem]) -> str:
        # stripe's module-level API is blocking
        return await asyncio.to_thread(self.create_session, items)
