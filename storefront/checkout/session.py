"""Checkout session requester: cart in, opaque card-checkout session id out."""
from typing import Any, Dict, Iterable, List, Optional

import httpx

from storefront.cart.models import CartLineItem
from storefront.errors import CheckoutSessionError
from storefront.logging import describe_items, get_logger
from storefront.services.money import to_float

logger = get_logger(__name__)

SESSION_PATH = "/create-checkout-session"


def build_session_payload(items: Iterable[CartLineItem]) -> Dict[str, List[Dict[str, Any]]]:
    """Request body for the session endpoint. Line item ids are not sent."""
    return {
        "cart": [
            {"name": item.name, "price": to_float(item.price), "quantity": item.quantity}
            for item in items
        ]
    }


class CheckoutSessionRequester:
    """Posts the cart to the session creation endpoint."""

    def __init__(
        self,
        backend_url: str,
        client: Optional[httpx.AsyncClient] = None,
        timeout: float = 10.0,
    ):
        self.backend_url = backend_url.rstrip("/")
        self.timeout = timeout
        self._http_client = client

    @property
    def endpoint(self) -> str:
        return f"{self.backend_url}{SESSION_PATH}"

    async def _get_http_client(self) -> httpx.AsyncClient:
        """Lazy creation of shared httpx client with timeouts."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout, connect=5.0),
            )
        return self._http_client

    async def aclose(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def request_checkout_session(self, items: List[CartLineItem]) -> str:
        """
        Create a checkout session for the given cart.

        Raises:
            ValueError: cart is empty
            CheckoutSessionError: non-2xx status or no session id in the body
            httpx.HTTPError: transport failure
        """
        if not items:
            raise ValueError("Cannot request a checkout session for an empty cart")

        client = await self._get_http_client()
        response = await client.post(self.endpoint, json=build_session_payload(items))

        if not response.is_success:
            raise CheckoutSessionError(
                f"Checkout session request failed with status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            session = response.json()
        except ValueError as e:
            raise CheckoutSessionError(
                f"Checkout session response is not JSON: {e}", status_code=response.status_code
            ) from e

        session_id = session.get("id") if isinstance(session, dict) else None
        if not isinstance(session_id, str) or not session_id:
            raise CheckoutSessionError(
                "Checkout session response has no id", status_code=response.status_code
            )

        logger.info(f"Checkout session created for {describe_items(items)}")
        return session_id
