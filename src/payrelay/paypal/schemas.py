"""Pydantic schemas for the Braintree nonce endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from payrelay.common.schemas import CamelModel


class NonceCheckoutRequest(BaseModel):
    payment_method_nonce: str = Field(..., min_length=1)
    amount: Decimal = Field(..., gt=0)


class ClientTokenResponse(CamelModel):
    client_token: Optional[str] = None
    success: bool
