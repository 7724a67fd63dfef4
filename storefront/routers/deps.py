"""
Shared Dependencies for Routers

Lazy-loaded singletons, overridable through FastAPI dependency_overrides.
"""
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from storefront.services.payments import CheckoutSessionService


_checkout_service: Optional["CheckoutSessionService"] = None


def get_checkout_service() -> "CheckoutSessionService":
    """Get or create CheckoutSessionService singleton (lazy loaded)"""
    global _checkout_service
    if _checkout_service is None:
        from storefront.services.payments import CheckoutSessionService
        _checkout_service = CheckoutSessionService()
    return _checkout_service
