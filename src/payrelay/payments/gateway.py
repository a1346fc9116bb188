"""StripeGateway — one method per remote Stripe call, bound to one account."""

import asyncio
import functools
import logging
from typing import Any, Optional

import stripe

from payrelay.payments.errors import classify_stripe_error

logger = logging.getLogger(__name__)


class StripeGateway:
    """Thin async wrapper over the synchronous Stripe SDK.

    Every call carries the account's secret key and the pinned API version,
    runs in a worker thread, and re-raises SDK errors as PayRelayError
    subclasses.

    Customer lookups by e-mail take the first match. Stripe does not enforce
    unique e-mails, so callers must only rely on these lookups where one
    customer per address is guaranteed.
    """

    def __init__(self, secret_key: str, api_version: str = "2020-08-27"):
        self.secret_key = secret_key
        self.api_version = api_version

    async def _call(self, fn, *args: Any, **params: Any) -> Any:
        call = functools.partial(
            fn, *args, api_key=self.secret_key, stripe_version=self.api_version, **params,
        )
        try:
            return await asyncio.to_thread(call)
        except stripe.StripeError as exc:
            raise classify_stripe_error(exc) from exc

    # ── Customers ──

    async def create_customer(self, email: Optional[str]) -> Any:
        return await self._call(stripe.Customer.create, email=email)

    async def find_customer(self, email: Optional[str]) -> Optional[Any]:
        customers = await self._call(stripe.Customer.list, email=email, limit=1)
        if not customers.data:
            return None
        return customers.data[0]

    async def find_card_payment_method(self, customer_id: str) -> Optional[Any]:
        methods = await self._call(
            stripe.PaymentMethod.list, customer=customer_id, type="card", limit=1,
        )
        if not methods.data:
            return None
        return methods.data[0]

    # ── Intents ──

    async def create_payment_intent(self, **params: Any) -> Any:
        intent = await self._call(stripe.PaymentIntent.create, **params)
        logger.debug("Created PaymentIntent %s (%s)", intent.id, intent.status)
        return intent

    async def confirm_payment_intent(self, intent_id: str) -> Any:
        return await self._call(stripe.PaymentIntent.confirm, intent_id)

    async def create_setup_intent(self, **params: Any) -> Any:
        return await self._call(stripe.SetupIntent.create, **params)

    async def create_ephemeral_key(self, customer_id: str) -> Any:
        return await self._call(stripe.EphemeralKey.create, customer=customer_id)
