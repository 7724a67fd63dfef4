"""
Storefront configuration.

Values come from the process environment; a local ``.env`` file is loaded
first when present.
"""
import os
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

DEFAULT_BACKEND_URL = "http://localhost:4242"
DEFAULT_FRONTEND_URL = "http://localhost:8000"
DEFAULT_CART_STORAGE_KEY = "cart"
DEFAULT_CURRENCY = "usd"

# Keys shipped in templates before the shop owner fills them in
PLACEHOLDER_PREFIX = "YOUR_"


def _split_origins(raw: str) -> List[str]:
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    return origins or ["*"]


def is_configured_key(value: str) -> bool:
    """A key counts as configured when set and not a template placeholder."""
    return bool(value) and not value.startswith(PLACEHOLDER_PREFIX)


@dataclass(frozen=True)
class Settings:
    stripe_secret_key: str = ""
    stripe_publishable_key: str = ""
    backend_url: str = DEFAULT_BACKEND_URL
    frontend_url: str = DEFAULT_FRONTEND_URL
    currency: str = DEFAULT_CURRENCY
    cart_storage_key: str = DEFAULT_CART_STORAGE_KEY
    cors_allow_origins: List[str] = field(default_factory=lambda: ["*"])

    @property
    def success_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/success.html"

    @property
    def cancel_url(self) -> str:
        return f"{self.frontend_url.rstrip('/')}/cart.html"

    def is_card_checkout_configured(self) -> bool:
        return is_configured_key(self.stripe_secret_key)

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            stripe_secret_key=os.environ.get("STRIPE_SECRET_KEY", ""),
            stripe_publishable_key=os.environ.get("STRIPE_PUBLISHABLE_KEY", ""),
            backend_url=os.environ.get("BACKEND_URL", DEFAULT_BACKEND_URL),
            frontend_url=os.environ.get("FRONTEND_URL", DEFAULT_FRONTEND_URL),
            currency=os.environ.get("CHECKOUT_CURRENCY", DEFAULT_CURRENCY).lower(),
            cart_storage_key=os.environ.get("CART_STORAGE_KEY", DEFAULT_CART_STORAGE_KEY),
            cors_allow_origins=_split_origins(os.environ.get("CORS_ALLOW_ORIGINS", "*")),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load settings once per process."""
    load_dotenv()
    return Settings.from_env()
