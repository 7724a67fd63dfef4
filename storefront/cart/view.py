"""Read-only projection of cart state for presentation."""
from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Tuple

from storefront.errors import MSG_CART_COUNT
from storefront.services.money import ZERO, format_amount, format_money, to_float
from .models import CartLineItem


def count_label(count: int) -> str:
    return MSG_CART_COUNT.format(count=count, suffix="" if count == 1 else "s")


@dataclass(frozen=True)
class CartSummary:
    line_items: Tuple[CartLineItem, ...]
    item_count: int
    total_amount: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.line_items

    @property
    def count_label(self) -> str:
        return count_label(self.item_count)

    @property
    def formatted_total(self) -> str:
        return format_amount(self.total_amount)

    def to_dict(self) -> dict:
        return {
            "items": [
                {
                    **item.to_dict(),
                    "key": item.key,
                    "unit_price_display": format_money(item.price),
                    "line_total": to_float(item.line_total),
                }
                for item in self.line_items
            ],
            "item_count": self.item_count,
            "count_label": self.count_label,
            "total": to_float(self.total_amount),
            "total_display": self.formatted_total,
            "is_empty": self.is_empty,
        }


def summarize_cart(items: Iterable[CartLineItem]) -> CartSummary:
    """Totals and counts for a cart snapshot. Pure; the input is not modified."""
    line_items = tuple(items)
    item_count = 0
    total = ZERO
    for item in line_items:
        item_count += item.quantity
        total += item.line_total
    return CartSummary(line_items=line_items, item_count=item_count, total_amount=total)
