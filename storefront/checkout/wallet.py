"""
Wallet checkout adapter.

Wraps a provider button widget (PayPal-style). The order amount is bound when
the buttons are rendered, so the buttons are torn down and rendered again on
every cart change.
"""
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import TYPE_CHECKING, Any, Awaitable, Callable, Dict, List, Optional, Protocol

from storefront.cart.view import summarize_cart
from storefront.errors import (
    MSG_WALLET_APPROVED,
    MSG_WALLET_CANCELLED,
    MSG_WALLET_RETRY,
    MSG_WALLET_UNAVAILABLE,
)
from storefront.logging import get_logger
from storefront.services.money import format_amount

if TYPE_CHECKING:
    from storefront.cart.models import CartLineItem
    from storefront.cart.service import CartStore
    from storefront.notifications import Notifier

logger = get_logger(__name__)

DEFAULT_MOUNT = "#paypal-button-container"

Capture = Callable[[], Awaitable[Any]]


class PaymentOutcome(str, Enum):
    APPROVED = "approved"
    CANCELLED = "cancelled"
    ERRORED = "errored"


@dataclass
class WalletCallbacks:
    create_order: Callable[[], Dict[str, Any]]
    on_approve: Callable[[Capture], Awaitable[None]]
    on_cancel: Callable[[], None]
    on_error: Callable[[Exception], None]


class WalletButtonsHandle(Protocol):
    def close(self) -> None:
        ...


class WalletButtons(Protocol):
    def render(self, mount: str, callbacks: WalletCallbacks) -> WalletButtonsHandle:
        ...


def build_order(total: Decimal) -> Dict[str, Any]:
    return {"purchase_units": [{"amount": {"value": format_amount(total)}}]}


class WalletCheckoutAdapter:
    def __init__(
        self,
        store: "CartStore",
        buttons: Optional[WalletButtons],
        notifier: "Notifier",
        mount: str = DEFAULT_MOUNT,
        silent_clear: bool = True,
    ):
        self.store = store
        self.buttons = buttons
        self.notifier = notifier
        self.mount = mount
        # The approval message already tells the user; skip "Cart cleared."
        self.silent_clear = silent_clear
        self.status_message: Optional[str] = None
        self._handle: Optional[WalletButtonsHandle] = None
        self.rendered_total: Optional[Decimal] = None

    @property
    def is_rendered(self) -> bool:
        return self._handle is not None

    def attach(self) -> None:
        self.store.add_listener(self.refresh)
        self.refresh(self.store.get_cart())

    def detach(self) -> None:
        self.store.remove_listener(self.refresh)
        self.teardown()

    def teardown(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
        self.rendered_total = None

    def refresh(self, items: List["CartLineItem"]) -> None:
        self.teardown()
        if not items:
            return

        if self.buttons is None:
            self.status_message = MSG_WALLET_UNAVAILABLE
            return

        total = summarize_cart(items).total_amount
        try:
            self._handle = self.buttons.render(self.mount, self._callbacks(total))
        except Exception as e:
            logger.error(f"Wallet buttons failed to render: {e}")
            self.status_message = MSG_WALLET_UNAVAILABLE
            return

        self.status_message = None
        self.rendered_total = total

    def _callbacks(self, total: Decimal) -> WalletCallbacks:
        async def on_approve(capture: Capture) -> None:
            await self.resolve(PaymentOutcome.APPROVED, capture=capture)

        def on_cancel() -> None:
            self._finish(PaymentOutcome.CANCELLED)

        def on_error(error: Exception) -> None:
            self._finish(PaymentOutcome.ERRORED, error)

        return WalletCallbacks(
            create_order=lambda: build_order(total),
            on_approve=on_approve,
            on_cancel=on_cancel,
            on_error=on_error,
        )

    async def resolve(
        self,
        outcome: PaymentOutcome,
        capture: Optional[Capture] = None,
        error: Optional[Exception] = None,
    ) -> PaymentOutcome:
        """
        Settle one widget interaction.

        An approval only counts once the capture succeeds; a failing capture
        is settled as an error and the cart is kept.
        """
        if outcome is PaymentOutcome.APPROVED and capture is not None:
            try:
                await capture()
            except Exception as e:
                return self._finish(PaymentOutcome.ERRORED, e)
        return self._finish(outcome, error)

    def _finish(self, outcome: PaymentOutcome, error: Optional[Exception] = None) -> PaymentOutcome:
        if outcome is PaymentOutcome.APPROVED:
            self.notifier.notify(MSG_WALLET_APPROVED)
            self.store.clear(silent=self.silent_clear)
        elif outcome is PaymentOutcome.CANCELLED:
            self.notifier.notify(MSG_WALLET_CANCELLED)
        else:
            logger.error(f"Wallet checkout failed: {error}")
            self.notifier.notify(MSG_WALLET_RETRY)
        return outcome
