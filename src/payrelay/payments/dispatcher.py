"""PaymentDispatcher — picks and runs one of the three confirmation paths."""

import logging
from typing import Any, Optional

from payrelay.common.exceptions import CustomerNotFoundError, PaymentMethodNotFoundError
from payrelay.payments.gateway import StripeGateway
from payrelay.payments.pricing import PriceTable
from payrelay.payments.schemas import PayRequest

logger = logging.getLogger(__name__)


class PaymentDispatcher:
    """Confirms a payment without relying on webhooks.

    Paths, first match wins:
    1. cvc_token + email: re-charge the customer's saved card after CVC recollection
    2. payment_method_id: create and confirm a new intent for that method
    3. payment_intent_id: confirm an intent after the client handled a required action

    Each path is a short sequence of remote calls; the first failing call
    raises a PayRelayError and the remaining calls are skipped.
    """

    def __init__(self, gateway: StripeGateway, prices: PriceTable):
        self.gateway = gateway
        self.prices = prices

    async def dispatch(self, request: PayRequest) -> Optional[Any]:
        """Return the resulting intent, or None if the request names no path."""
        if request.cvc_token and request.email:
            return await self._charge_saved_card(request)
        if request.payment_method_id:
            return await self._create_and_confirm(request)
        if request.payment_intent_id:
            return await self.gateway.confirm_payment_intent(request.payment_intent_id)
        logger.info("Pay request carried no payment method, intent or saved-card details")
        return None

    def _confirm_params(self, request: PayRequest, payment_method: str) -> dict[str, Any]:
        params: dict[str, Any] = {
            "amount": self.prices.calculate_order_amount(request.items),
            "confirm": True,
            "confirmation_method": "manual",
            "currency": request.currency,
            "payment_method": payment_method,
        }
        if request.use_stripe_sdk is not None:
            # Mobile SDKs handle next actions natively when this is set
            params["use_stripe_sdk"] = request.use_stripe_sdk
        return params

    async def _charge_saved_card(self, request: PayRequest) -> Any:
        customer = await self.gateway.find_customer(request.email)
        if customer is None:
            raise CustomerNotFoundError()

        payment_method = await self.gateway.find_card_payment_method(customer.id)
        if payment_method is None:
            raise PaymentMethodNotFoundError()

        params = self._confirm_params(request, payment_method.id)
        params["customer"] = customer.id
        params["payment_method_options"] = {"card": {"cvc_token": request.cvc_token}}
        return await self.gateway.create_payment_intent(**params)

    async def _create_and_confirm(self, request: PayRequest) -> Any:
        return await self.gateway.create_payment_intent(
            **self._confirm_params(request, request.payment_method_id),
        )
