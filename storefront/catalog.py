"""
Product catalog.

Products are read-only. The shop page embeds them as an inline JSON document;
when that document is missing or unusable the built-in list is served.
"""
import json
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

from storefront.cart.models import clean_str, coerce_price, slugify
from storefront.logging import get_logger
from storefront.services.money import to_float

logger = get_logger(__name__)


@dataclass(frozen=True)
class Product:
    id: str
    name: str
    price: Decimal
    image: str = ""
    description: str = ""

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "price": to_float(self.price),
            "image": self.image,
            "description": self.description,
        }


def normalize_product(raw: Any) -> Optional[Product]:
    """Coerce an inline product record; name is required, id derives from it."""
    if not isinstance(raw, Mapping):
        return None

    name = clean_str(raw.get("name"))
    if not name:
        return None

    product_id = clean_str(raw.get("id")) or slugify(name)
    if not product_id:
        return None

    return Product(
        id=product_id,
        name=name,
        price=coerce_price(raw.get("price")),
        image=clean_str(raw.get("image")),
        description=clean_str(raw.get("description")),
    )


_IMAGE_BASE = "https://images.unsplash.com"

FALLBACK_PRODUCTS: tuple = (
    Product(
        id="custom-shirt",
        name="Custom Shirt",
        price=Decimal("20"),
        image=f"{_IMAGE_BASE}/photo-1521572163474-6864f9cf17ab?auto=format&fit=crop&w=600&q=80",
        description="Soft cotton tees with your artwork pressed in vibrant colors.",
    ),
    Product(
        id="custom-hoodie",
        name="Custom Hoodie",
        price=Decimal("35"),
        image=f"{_IMAGE_BASE}/photo-1582719478250-c89cae4dc85b?auto=format&fit=crop&w=600&q=80",
        description="Cozy fleece hoodies personalized for gifts, teams, or events.",
    ),
    Product(
        id="custom-tote",
        name="Custom Tote Bag",
        price=Decimal("15"),
        image=f"{_IMAGE_BASE}/photo-1503342452485-86eb59083b47?auto=format&fit=crop&w=600&q=80",
        description="Reusable totes ready for monograms, quotes, and bold graphics.",
    ),
    Product(
        id="custom-apron",
        name="Custom Apron",
        price=Decimal("28"),
        image=f"{_IMAGE_BASE}/photo-1503387762-592deb58ef4e?auto=format&fit=crop&w=600&q=80",
        description="Aprons for makers and bakers finished with durable vinyl art.",
    ),
    Product(
        id="vinyl-sticker-pack",
        name="Vinyl Sticker Pack",
        price=Decimal("12"),
        image=f"{_IMAGE_BASE}/photo-1527529482837-4698179dc6ce?auto=format&fit=crop&w=600&q=80",
        description="A bundle of custom die-cut stickers for laptops, bottles, and more.",
    ),
)


def parse_inline_products(document: Optional[str]) -> List[Product]:
    """
    Parse the embedded product document.

    Falls back to FALLBACK_PRODUCTS when the document is absent, not JSON,
    not a list, empty, or contains no usable product.
    """
    if document is None:
        return list(FALLBACK_PRODUCTS)

    try:
        parsed = json.loads(document or "[]")
    except (json.JSONDecodeError, TypeError) as e:
        logger.warning(f"Unable to parse inline product data: {e}")
        return list(FALLBACK_PRODUCTS)

    if not isinstance(parsed, list) or not parsed:
        return list(FALLBACK_PRODUCTS)

    products = [product for product in map(normalize_product, parsed) if product]
    return products or list(FALLBACK_PRODUCTS)


class Catalog:
    """Lookup over a fixed product list (first product wins on duplicate ids)."""

    def __init__(self, products: Optional[Iterable[Product]] = None):
        self._products: List[Product] = list(FALLBACK_PRODUCTS if products is None else products)
        self._by_id: Dict[str, Product] = {}
        for product in self._products:
            self._by_id.setdefault(product.id, product)

    @classmethod
    def from_inline(cls, document: Optional[str]) -> "Catalog":
        return cls(parse_inline_products(document))

    def find(self, product_id: Any) -> Optional[Product]:
        if product_id is None:
            return None
        return self._by_id.get(str(product_id))

    def __iter__(self) -> Iterator[Product]:
        return iter(self._products)

    def __len__(self) -> int:
        return len(self._products)
