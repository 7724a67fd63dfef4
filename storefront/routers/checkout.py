"""
Checkout Router

Creates hosted card checkout sessions from a cart payload. Stateless: the
cart is not stored server-side.
"""
from fastapi import APIRouter, Depends, HTTPException

from storefront.errors import (
    ERROR_CHECKOUT_NOT_CONFIGURED,
    ERROR_EMPTY_CART,
    ERROR_PAYMENT_FAILED,
    CheckoutNotConfiguredError,
    PaymentProviderError,
)
from storefront.logging import get_logger
from storefront.services.payments import CheckoutSessionService
from .deps import get_checkout_service
from .models import CheckoutSessionResponse, CreateCheckoutSessionRequest

logger = get_logger(__name__)

router = APIRouter(tags=["checkout"])


@router.post("/create-checkout-session", response_model=CheckoutSessionResponse)
async def create_checkout_session(
    request: CreateCheckoutSessionRequest,
    service: CheckoutSessionService = Depends(get_checkout_service),
):
    """Map the cart to provider line items and return the session id."""
    if not request.cart:
        raise HTTPException(status_code=400, detail=ERROR_EMPTY_CART)

    try:
        session_id = await service.create_session_async(request.cart)
    except CheckoutNotConfiguredError:
        raise HTTPException(status_code=500, detail=ERROR_CHECKOUT_NOT_CONFIGURED)
    except PaymentProviderError:
        raise HTTPException(status_code=502, detail=ERROR_PAYMENT_FAILED)

    return CheckoutSessionResponse(id=session_id)
