"""
Checkout API Pydantic Models
"""
from typing import List, Optional

from pydantic import BaseModel, Field


class CheckoutLineItem(BaseModel):
    id: Optional[str] = None
    name: str = Field(min_length=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    quantity: int = Field(default=1, ge=1)


class CreateCheckoutSessionRequest(BaseModel):
    cart: List[CheckoutLineItem] = Field(default_factory=list)


class CheckoutSessionResponse(BaseModel):
    id: str
