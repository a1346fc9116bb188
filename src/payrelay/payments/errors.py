"""Map Stripe SDK errors onto the PayRelay error taxonomy."""

import logging
from typing import Any

import stripe

from payrelay.common.exceptions import (
    AuthenticationRequiredError,
    PaymentDeclinedError,
    PayRelayError,
    ProcessorError,
)

logger = logging.getLogger(__name__)


def _error_body(exc: stripe.StripeError) -> dict[str, Any]:
    body = exc.json_body if isinstance(exc.json_body, dict) else {}
    error = body.get("error")
    return error if isinstance(error, dict) else {}


def _message(exc: stripe.StripeError) -> str:
    return exc.user_message or _error_body(exc).get("message") or str(exc)


def classify_stripe_error(exc: stripe.StripeError) -> PayRelayError:
    """Classify a failed Stripe call.

    authentication_required -> AuthenticationRequiredError (step-up needed)
    any other error code    -> PaymentDeclinedError
    no code                 -> ProcessorError
    """
    error = _error_body(exc)
    code = exc.code or error.get("code")
    payment_intent = error.get("payment_intent") or {}
    payment_method = error.get("payment_method") or {}

    if code == "authentication_required":
        card = payment_method.get("card") or {}
        return AuthenticationRequiredError(
            message=_message(exc),
            payment_method_id=payment_method.get("id"),
            client_secret=payment_intent.get("client_secret"),
            card_brand=card.get("brand"),
            card_last4=card.get("last4"),
        )

    if code:
        return PaymentDeclinedError(
            message=_message(exc),
            decline_code=code,
            client_secret=payment_intent.get("client_secret"),
        )

    logger.warning("Unclassified Stripe error: %s", exc)
    return ProcessorError(_message(exc))
