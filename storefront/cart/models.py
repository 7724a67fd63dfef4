"""Cart line item model and record normalization."""
import re
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Mapping, Optional

from storefront.services.money import ZERO, multiply, plain, to_decimal, to_float, to_positive_int

DEFAULT_ITEM_NAME = "Item"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


class IdentityStrategy(str, Enum):
    """How line items are told apart inside one cart."""
    ID = "id"  # product id, derived from the name when missing
    COMPOSITE = "composite"  # id when the record has one, otherwise name::price


def slugify(text: Any) -> str:
    """Lowercase, collapse non-alphanumeric runs to '-', trim leading/trailing '-'."""
    value = "" if text is None else str(text)
    return _NON_ALNUM.sub("-", value.strip().lower()).strip("-")


def clean_str(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def coerce_price(value: Any) -> Decimal:
    """Prices are finite and non-negative; anything else becomes 0."""
    price = to_decimal(value)
    return price if price >= 0 else ZERO


@dataclass
class CartLineItem:
    """Single row in the cart: product reference, snapshotted price, quantity."""
    name: str
    price: Decimal
    quantity: int
    id: Optional[str] = None

    @property
    def key(self) -> str:
        return identity_key(self)

    @property
    def line_total(self) -> Decimal:
        return multiply(self.price, self.quantity)

    def to_dict(self) -> dict:
        """Persisted shape: {id?, name, price, quantity}."""
        data: dict = {}
        if self.id:
            data["id"] = self.id
        data["name"] = self.name
        data["price"] = to_float(self.price)
        data["quantity"] = self.quantity
        return data


def identity_key(item: CartLineItem) -> str:
    """Product id when present, else a name::price composite."""
    if item.id:
        return item.id
    return f"{item.name}::{plain(item.price)}"


def normalize_item(
    raw: Any, strategy: IdentityStrategy = IdentityStrategy.ID
) -> Optional[CartLineItem]:
    """
    Validate and coerce a raw record into a CartLineItem.

    Returns None for records that cannot be identified: non-mappings, records
    with neither name nor id, and records whose id is empty after derivation.
    A bad price or quantity never rejects the record; they fall back to 0
    and 1 respectively.
    """
    if isinstance(raw, CartLineItem):
        raw = {"id": raw.id, "name": raw.name, "price": raw.price, "quantity": raw.quantity}
    if not isinstance(raw, Mapping):
        return None

    name = clean_str(raw.get("name"))
    item_id = clean_str(raw.get("id"))
    if not name and not item_id:
        return None

    if strategy is IdentityStrategy.ID:
        if not name:
            return None
        item_id = item_id or slugify(name)
        if not item_id:
            return None
    elif not name:
        name = DEFAULT_ITEM_NAME

    return CartLineItem(
        id=item_id or None,
        name=name,
        price=coerce_price(raw.get("price")),
        quantity=to_positive_int(raw.get("quantity"), fallback=1),
    )
