"""Cart package: line item model, storage backends, store and view projection."""
from .models import CartLineItem, IdentityStrategy, identity_key, normalize_item, slugify
from .service import CartStore
from .storage import CartStorage, FileStorage, MemoryStorage, RedisStorage
from .view import CartSummary, summarize_cart

__all__ = [
    "CartLineItem",
    "CartStorage",
    "CartStore",
    "CartSummary",
    "FileStorage",
    "IdentityStrategy",
    "MemoryStorage",
    "RedisStorage",
    "identity_key",
    "normalize_item",
    "slugify",
    "summarize_cart",
]
