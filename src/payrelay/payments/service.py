"""StripePaymentService — the Stripe checkout flows behind the HTTP routes."""

import logging
from typing import Any, Callable, Optional

from payrelay.common.exceptions import (
    AuthenticationRequiredError,
    CustomerNotFoundError,
    PaymentDeclinedError,
    PaymentMethodNotFoundError,
)
from payrelay.credentials.resolver import CredentialSet, CredentialTable
from payrelay.payments.dispatcher import PaymentDispatcher
from payrelay.payments.gateway import StripeGateway
from payrelay.payments.normalizer import (
    authentication_required_response,
    client_secret_response,
    declined_response,
    intent_response,
)
from payrelay.payments.pricing import PriceTable
from payrelay.payments.schemas import (
    PayRequest,
    PaymentIntentCreate,
    PaymentIntentWithMethodCreate,
    PaymentSheetRequest,
    PaymentSheetResponse,
    SetupIntentCreate,
    SetupIntentResponse,
)

logger = logging.getLogger(__name__)

GatewayFactory = Callable[[str, str], StripeGateway]


class StripePaymentService:
    """Builds per-request gateways from the credential table and runs each flow.

    Methods raise PayRelayError subclasses; the router turns them into JSON.
    """

    def __init__(
        self,
        credentials: CredentialTable,
        prices: PriceTable,
        api_version: str = "2020-08-27",
        off_session_currency: str = "usd",
        gateway_factory: GatewayFactory = StripeGateway,
    ):
        self.credentials = credentials
        self.prices = prices
        self.api_version = api_version
        self.off_session_currency = off_session_currency
        self._gateway_factory = gateway_factory

    def gateway_for(self, credential_set: CredentialSet) -> StripeGateway:
        return self._gateway_factory(credential_set.secret_key, self.api_version)

    def publishable_key(self, payment_method: Optional[str] = None) -> str:
        return self.credentials.resolve(payment_method).publishable_key

    async def create_payment_intent(self, body: PaymentIntentCreate) -> dict[str, Any]:
        method = body.payment_method_types[0] if body.payment_method_types else None
        gateway = self.gateway_for(self.credentials.resolve(method))

        customer = await gateway.create_customer(body.email)
        intent = await gateway.create_payment_intent(
            amount=self.prices.calculate_order_amount(body.items),
            currency=body.currency,
            customer=customer.id,
            payment_method_options={
                "card": {"request_three_d_secure": body.request_three_d_secure or "automatic"},
                "sofort": {"preferred_language": "en"},
            },
            payment_method_types=body.payment_method_types,
        )
        return client_secret_response(intent)

    async def create_payment_intent_with_payment_method(
        self, body: PaymentIntentWithMethodCreate,
    ) -> dict[str, Any]:
        """Prepare an intent for the customer's saved card, left unconfirmed."""
        gateway = self.gateway_for(self.credentials.default)

        customer = await gateway.find_customer(body.email)
        if customer is None:
            raise CustomerNotFoundError()
        payment_method = await gateway.find_card_payment_method(customer.id)
        if payment_method is None:
            raise PaymentMethodNotFoundError()

        intent = await gateway.create_payment_intent(
            amount=self.prices.calculate_order_amount(body.items),
            currency=body.currency,
            payment_method_options={
                "card": {"request_three_d_secure": body.request_three_d_secure or "automatic"},
            },
            payment_method=payment_method.id,
            customer=customer.id,
        )
        return client_secret_response(intent, payment_method_id=payment_method.id)

    async def pay(self, body: PayRequest) -> Optional[dict[str, Any]]:
        dispatcher = PaymentDispatcher(self.gateway_for(self.credentials.default), self.prices)
        intent = await dispatcher.dispatch(body)
        if intent is None:
            return None
        return intent_response(intent)

    async def create_setup_intent(self, body: SetupIntentCreate) -> SetupIntentResponse:
        method = body.payment_method_types[0] if body.payment_method_types else None
        credential_set = self.credentials.resolve(method)
        gateway = self.gateway_for(credential_set)

        customer = await gateway.find_customer(body.email)
        if customer is None:
            customer = await gateway.create_customer(body.email)

        setup_intent = await gateway.create_setup_intent(
            customer=customer.id,
            payment_method_types=body.payment_method_types,
        )
        return SetupIntentResponse(
            customer_id=customer.id,
            publishable_key=credential_set.publishable_key,
            client_secret=setup_intent.client_secret,
        )

    async def charge_card_off_session(self, email: str) -> dict[str, Any]:
        """Charge a customer's saved card while they are not present.

        Declines are returned as data so the caller can bring the customer
        back on-session; unclassified errors propagate.
        """
        credential_set = self.credentials.default
        gateway = self.gateway_for(credential_set)
        amount = self.prices.calculate_order_amount()

        try:
            customer = await gateway.find_customer(email)
            if customer is None:
                raise CustomerNotFoundError()
            payment_method = await gateway.find_card_payment_method(customer.id)
            if payment_method is None:
                raise PaymentMethodNotFoundError()

            intent = await gateway.create_payment_intent(
                amount=amount,
                currency=self.off_session_currency,
                payment_method=payment_method.id,
                customer=customer.id,
                off_session=True,
                confirm=True,
            )
        except AuthenticationRequiredError as err:
            logger.warning("Off-session charge needs authentication for %s", err.payment_method_id)
            return {
                **authentication_required_response(err),
                "publicKey": credential_set.publishable_key,
                "amount": amount,
            }
        except PaymentDeclinedError as err:
            logger.warning("Off-session charge declined: %s", err.decline_code)
            return {
                **declined_response(err),
                "publicKey": credential_set.publishable_key,
            }

        return {
            "succeeded": True,
            "clientSecret": intent.client_secret,
            "publicKey": credential_set.publishable_key,
        }

    async def create_payment_sheet(self, body: PaymentSheetRequest) -> PaymentSheetResponse:
        gateway = self.gateway_for(self.credentials.default)

        ephemeral_key = await gateway.create_ephemeral_key(body.customer_id)
        intent = await gateway.create_payment_intent(
            amount=body.amount,
            currency=body.currency,
            customer=body.customer_id,
        )
        return PaymentSheetResponse(
            payment_intent=intent.client_secret,
            ephemeral_key=ephemeral_key.secret,
            customer=body.customer_id,
        )
