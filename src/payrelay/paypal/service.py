"""BraintreeService — client tokens and nonce checkout against Braintree."""

import asyncio
import logging
from decimal import Decimal
from typing import Any, Optional

import braintree
from braintree.exceptions.braintree_error import BraintreeError

from payrelay.common.config import PayRelaySettings
from payrelay.common.exceptions import ProcessorError

logger = logging.getLogger(__name__)

ENVIRONMENTS = {
    "sandbox": braintree.Environment.Sandbox,
    "production": braintree.Environment.Production,
}


def serialize_result(result: Any) -> dict[str, Any]:
    """Flatten a transaction.sale result into JSON-safe data."""
    if result.is_success:
        txn = result.transaction
        return {
            "success": True,
            "transaction": {
                "id": txn.id,
                "status": txn.status,
                "type": txn.type,
                "amount": str(txn.amount),
                "currency_iso_code": txn.currency_iso_code,
            },
        }
    return {
        "success": False,
        "message": result.message,
        "errors": [
            {"attribute": e.attribute, "code": e.code, "message": e.message}
            for e in result.errors.deep_errors
        ],
    }


class BraintreeService:
    """Wraps one BraintreeGateway configured from settings.

    The gateway is built on first use so that missing credentials surface as
    a failed request rather than a failed startup.
    """

    def __init__(self, settings: PayRelaySettings):
        self.settings = settings
        self._gateway: Optional[braintree.BraintreeGateway] = None

    def _get_gateway(self) -> braintree.BraintreeGateway:
        if self._gateway is None:
            environment = ENVIRONMENTS.get(self.settings.paypal_environment.lower())
            if environment is None:
                raise ProcessorError(
                    f"Unknown Braintree environment: {self.settings.paypal_environment!r}"
                )
            self._gateway = braintree.BraintreeGateway(
                braintree.Configuration(
                    environment=environment,
                    merchant_id=self.settings.paypal_merchant_id,
                    public_key=self.settings.paypal_public_key,
                    private_key=self.settings.paypal_private_key,
                )
            )
        return self._gateway

    async def _run(self, fn, *args: Any) -> Any:
        try:
            return await asyncio.to_thread(fn, *args)
        except BraintreeError as exc:
            raise ProcessorError(f"Braintree request failed: {type(exc).__name__}") from exc

    async def create_client_token(self) -> str:
        return await self._run(lambda: self._get_gateway().client_token.generate())

    async def checkout(self, nonce: str, amount: Decimal) -> dict[str, Any]:
        """Charge a payment method nonce and submit it for settlement."""
        result = await self._run(
            lambda: self._get_gateway().transaction.sale({
                "amount": str(amount),
                "payment_method_nonce": nonce,
                "options": {"submit_for_settlement": True},
            })
        )
        if not result.is_success:
            logger.info("Braintree sale not successful: %s", result.message)
        return serialize_result(result)
