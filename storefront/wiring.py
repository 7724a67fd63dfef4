"""
Storefront assembly.

Builds the cart store and both checkout paths from Settings, the way the
cart page wires them together on load.
"""
from dataclasses import dataclass
from typing import Callable, Optional

import httpx

from storefront.cart import CartStore, MemoryStorage, RedisStorage
from storefront.cart.storage import CartStorage, is_redis_configured
from storefront.catalog import Catalog
from storefront.checkout import (
    CardCheckoutController,
    CardRedirect,
    CheckoutSessionRequester,
    WalletButtons,
    WalletCheckoutAdapter,
)
from storefront.config import Settings, get_settings, is_configured_key
from storefront.logging import get_logger
from storefront.notifications import LogNotifier, Notifier

logger = get_logger(__name__)

RedirectFactory = Callable[[str], CardRedirect]


@dataclass
class Storefront:
    store: CartStore
    card: CardCheckoutController
    wallet: WalletCheckoutAdapter
    requester: CheckoutSessionRequester

    async def aclose(self) -> None:
        self.wallet.detach()
        await self.requester.aclose()


def default_storage(settings: Settings) -> CartStorage:
    """Upstash Redis under the configured key when available, else in-process."""
    if is_redis_configured():
        return RedisStorage(settings.cart_storage_key)
    logger.warning("Upstash Redis not configured, cart kept in memory")
    return MemoryStorage()


def build_storefront(
    settings: Optional[Settings] = None,
    *,
    storage: Optional[CartStorage] = None,
    catalog: Optional[Catalog] = None,
    notifier: Optional[Notifier] = None,
    redirect_factory: Optional[RedirectFactory] = None,
    wallet_buttons: Optional[WalletButtons] = None,
    http_client: Optional[httpx.AsyncClient] = None,
) -> Storefront:
    """
    Wire a cart store, card checkout and wallet checkout.

    Card checkout gets a redirect only when a real publishable key is set;
    otherwise its control shows "Card checkout unavailable".
    """
    settings = settings or get_settings()
    notifier = notifier or LogNotifier()

    store = CartStore(
        storage if storage is not None else default_storage(settings),
        catalog or Catalog(),
        notifier,
    )

    redirect: Optional[CardRedirect] = None
    if redirect_factory is not None and is_configured_key(settings.stripe_publishable_key):
        redirect = redirect_factory(settings.stripe_publishable_key)

    requester = CheckoutSessionRequester(settings.backend_url, client=http_client)
    card = CardCheckoutController(store, requester, redirect, notifier)
    wallet = WalletCheckoutAdapter(store, wallet_buttons, notifier)

    card.attach()
    wallet.attach()

    return Storefront(store=store, card=card, wallet=wallet, requester=requester)
