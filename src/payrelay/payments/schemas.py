"""Pydantic schemas for the Stripe checkout endpoints.

Request bodies keep the field names the browser and mobile clients already
send, which mix snake_case and camelCase.
"""

from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from payrelay.common.schemas import CamelModel
from payrelay.payments.pricing import OrderItem


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class PaymentIntentCreate(_Request):
    email: Optional[str] = None
    items: list[OrderItem] = Field(default_factory=list)
    currency: str
    request_three_d_secure: Optional[str] = None
    payment_method_types: list[str] = Field(default_factory=list)


class PaymentIntentWithMethodCreate(_Request):
    email: str
    items: list[OrderItem] = Field(default_factory=list)
    currency: str
    request_three_d_secure: Optional[str] = None


class PayRequest(_Request):
    """Body of /pay-without-webhooks.

    Exactly one of payment_method_id, payment_intent_id or (cvc_token + email)
    is expected; see PaymentDispatcher for the precedence.
    """

    payment_method_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("paymentMethodId", "payment_method_id"),
    )
    payment_intent_id: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("paymentIntentId", "payment_intent_id"),
    )
    cvc_token: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("cvcToken", "cvc_token"),
    )
    email: Optional[str] = None
    items: list[OrderItem] = Field(default_factory=list)
    currency: Optional[str] = None
    use_stripe_sdk: Optional[bool] = Field(
        default=None, validation_alias=AliasChoices("useStripeSdk", "use_stripe_sdk"),
    )


class SetupIntentCreate(_Request):
    email: Optional[str] = None
    payment_method_types: list[str] = Field(default_factory=list)


class OffSessionChargeRequest(_Request):
    email: str


class PaymentSheetRequest(_Request):
    customer_id: str = Field(validation_alias=AliasChoices("customerId", "customer_id"))
    currency: str
    amount: int = Field(ge=0)


# ── Responses ──

class StripeKeyResponse(CamelModel):
    publishable_key: str


class SetupIntentResponse(CamelModel):
    customer_id: str
    publishable_key: str
    client_secret: str


class PaymentSheetResponse(CamelModel):
    payment_intent: str
    ephemeral_key: str
    customer: str
