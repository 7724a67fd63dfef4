"""Cart store: one serialized blob, normalized on every read and write."""
import json
from typing import TYPE_CHECKING, Callable, Dict, List, Optional

from storefront.errors import MSG_CART_CLEARED, MSG_ITEM_ADDED, MSG_ITEM_REMOVED
from storefront.logging import describe_items, get_logger, sanitize_string_for_logging
from storefront.services.money import to_int, to_positive_int
from .models import CartLineItem, IdentityStrategy, identity_key, normalize_item
from .storage import CartStorage
from .view import CartSummary, summarize_cart

if TYPE_CHECKING:
    from storefront.catalog import Catalog
    from storefront.notifications import Notifier

logger = get_logger(__name__)

CartListener = Callable[[List[CartLineItem]], None]


class CartStore:
    """
    Owns the canonical list of cart line items.

    Every operation reads the whole blob, normalizes and deduplicates it,
    applies one mutation and writes the whole result back. Storage failures
    are logged and never reach the caller:
    - unreadable or corrupt blob reads as an empty cart
    - a failed write leaves the stored blob as it was

    Listeners are called with the fresh cart after every mutation.
    """

    def __init__(
        self,
        storage: CartStorage,
        catalog: "Catalog",
        notifier: Optional["Notifier"] = None,
        strategy: IdentityStrategy = IdentityStrategy.ID,
    ):
        self.storage = storage
        self.catalog = catalog
        self.notifier = notifier
        self.strategy = strategy
        self._listeners: List[CartListener] = []

    # ==================== PERSISTENCE ====================

    def _load(self) -> List[CartLineItem]:
        try:
            raw = self.storage.get()
        except Exception as e:
            logger.error(f"Unable to read cart from storage: {e}")
            return []

        if not raw:
            return []

        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as e:
            logger.warning(f"Corrupted cart data, treating as empty: {e}")
            return []

        if not isinstance(parsed, list):
            logger.warning("Cart data is not a list, treating as empty")
            return []

        return self._merge(normalize_item(record, self.strategy) for record in parsed)

    @staticmethod
    def _merge(items) -> List[CartLineItem]:
        """Drop rejected records and fold duplicate identities into the first occurrence."""
        merged: Dict[str, CartLineItem] = {}
        for item in items:
            if item is None:
                continue
            existing = merged.get(item.key)
            if existing is None:
                merged[item.key] = item
            else:
                existing.quantity += item.quantity
        return list(merged.values())

    def _save(self, items: List[CartLineItem]) -> None:
        try:
            data = json.dumps([item.to_dict() for item in items]).encode("utf-8")
            self.storage.set(data)
        except Exception as e:
            logger.error(f"Unable to persist cart ({describe_items(items)}): {e}")

    def _notify(self, message: str) -> None:
        if self.notifier is not None:
            self.notifier.notify(message)

    def _refresh(self, items: List[CartLineItem]) -> None:
        for listener in list(self._listeners):
            try:
                listener(list(items))
            except Exception as e:
                logger.error(f"Cart listener {getattr(listener, '__qualname__', listener)} failed: {e}")

    def _commit(self, items: List[CartLineItem]) -> List[CartLineItem]:
        self._save(items)
        self._refresh(items)
        return items

    # ==================== LISTENERS ====================

    def add_listener(self, listener: CartListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def remove_listener(self, listener: CartListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    # ==================== READS ====================

    def get_cart(self) -> List[CartLineItem]:
        """Current normalized, deduplicated cart. Never raises."""
        return self._load()

    def snapshot(self) -> CartSummary:
        return summarize_cart(self._load())

    def find(self, identity: str) -> Optional[CartLineItem]:
        return next((item for item in self._load() if item.key == identity), None)

    # ==================== MUTATIONS ====================

    def add_item(self, product_id: str) -> List[CartLineItem]:
        """Add one unit of a catalog product; unknown products are ignored."""
        product = self.catalog.find(product_id)
        if product is None:
            logger.info(f"Ignoring add for unknown product {sanitize_string_for_logging(product_id)}")
            return self._load()

        cart = self._load()
        candidate = CartLineItem(id=product.id, name=product.name, price=product.price, quantity=1)
        key = identity_key(candidate)

        existing = next((item for item in cart if item.key == key), None)
        if existing is not None:
            existing.quantity += 1
        else:
            cart.append(candidate)

        self._commit(cart)
        self._notify(MSG_ITEM_ADDED.format(name=product.name))
        return cart

    def remove_item(self, identity: str) -> bool:
        """Remove every line item with this identity. Returns True if any was removed."""
        cart = self._load()
        removed = [item for item in cart if item.key == identity]
        if not removed:
            return False

        self._commit([item for item in cart if item.key != identity])
        self._notify(MSG_ITEM_REMOVED.format(name=removed[0].name))
        return True

    def adjust_quantity(self, identity: str, delta: int) -> List[CartLineItem]:
        """
        Add delta to an item's quantity (the +/- controls).

        Reaching zero or below removes the item and is reported as a removal.
        """
        step = to_int(delta)
        if not step:
            return self._load()

        cart = self._load()
        target = next((item for item in cart if item.key == identity), None)
        if target is None:
            return cart

        new_quantity = target.quantity + step
        if new_quantity <= 0:
            cart = [item for item in cart if item.key != identity]
            self._commit(cart)
            self._notify(MSG_ITEM_REMOVED.format(name=target.name))
            return cart

        target.quantity = max(1, new_quantity)
        return self._commit(cart)

    def set_quantity(self, identity: str, quantity) -> List[CartLineItem]:
        """
        Set an absolute quantity (typed input).

        Unusable input is corrected to 1; this never removes the item.
        """
        cart = self._load()
        target = next((item for item in cart if item.key == identity), None)
        if target is None:
            return cart

        target.quantity = to_positive_int(quantity, fallback=1)
        return self._commit(cart)

    def clear(self, silent: bool = False) -> None:
        """Empty the cart. ``silent`` skips the "cleared" notification."""
        self._commit([])
        if not silent:
            self._notify(MSG_CART_CLEARED)
