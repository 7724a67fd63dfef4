"""Card checkout: request a session, then hand it to the hosted-page redirect."""
from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Optional, Protocol

import httpx

from storefront.errors import (
    LABEL_CARD_READY,
    LABEL_CARD_REDIRECTING,
    LABEL_CARD_UNAVAILABLE,
    MSG_CARD_NOT_CONFIGURED,
    MSG_CARD_RETRY,
    MSG_CART_EMPTY,
    CheckoutSessionError,
    PaymentProviderError,
)
from storefront.logging import get_logger

if TYPE_CHECKING:
    from storefront.cart.models import CartLineItem
    from storefront.cart.service import CartStore
    from storefront.notifications import Notifier
    from .session import CheckoutSessionRequester

logger = get_logger(__name__)


class CardRedirect(Protocol):
    """Hosted payment page navigation. Returns an error message on failure."""

    async def redirect_to_checkout(self, session_id: str) -> Optional[str]:
        ...


@dataclass
class CheckoutControl:
    """State of the "Pay with Card" control."""
    disabled: bool = True
    label: str = LABEL_CARD_READY


class CardCheckoutController:
    def __init__(
        self,
        store: "CartStore",
        requester: "CheckoutSessionRequester",
        redirect: Optional[CardRedirect],
        notifier: "Notifier",
    ):
        self.store = store
        self.requester = requester
        self.redirect = redirect
        self.notifier = notifier
        self.control = CheckoutControl()
        self._busy = False

    def attach(self) -> None:
        self.store.add_listener(self.refresh)
        self.refresh(self.store.get_cart())

    def refresh(self, items: List["CartLineItem"]) -> None:
        if self._busy:
            return
        has_redirect = self.redirect is not None
        self.control.disabled = not items or not has_redirect
        self.control.label = LABEL_CARD_READY if has_redirect else LABEL_CARD_UNAVAILABLE

    async def start(self) -> bool:
        """
        Run one card checkout attempt.

        Returns True once the redirect was handed off. The cart is left as is;
        it is cleared by the success page after the hosted flow returns.
        """
        if self._busy:
            logger.info("Card checkout already in progress, ignoring")
            return False

        cart = self.store.get_cart()
        if not cart:
            self.notifier.notify(MSG_CART_EMPTY)
            return False

        if self.redirect is None:
            self.notifier.notify(MSG_CARD_NOT_CONFIGURED)
            return False

        original_label = self.control.label
        self._busy = True
        self.control.disabled = True
        self.control.label = LABEL_CARD_REDIRECTING

        try:
            session_id = await self.requester.request_checkout_session(cart)
            try:
                error = await self.redirect.redirect_to_checkout(session_id)
            except Exception as e:
                raise PaymentProviderError(f"Redirect to hosted checkout failed: {e}") from e
            if error:
                raise PaymentProviderError(error)
            return True
        except (CheckoutSessionError, PaymentProviderError, httpx.HTTPError) as e:
            logger.error(f"Card checkout failed: {e}")
            self.notifier.notify(MSG_CARD_RETRY)
            return False
        finally:
            self._busy = False
            self.control.disabled = False
            self.control.label = original_label


def complete_checkout(store: "CartStore") -> None:
    """Success page hook: the hosted flow finished, drop the paid cart."""
    store.clear(silent=True)
