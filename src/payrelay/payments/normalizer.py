"""Shape intents and classified errors into the JSON the checkout client reads."""

from typing import Any, Optional

from payrelay.common.exceptions import AuthenticationRequiredError, PaymentDeclinedError

CARD_DENIED_MESSAGE = "Your card was denied, please provide a new payment method"


def intent_response(intent: Any) -> dict[str, Any]:
    """Map an intent's status onto the client contract.

    requires_action  -> client must run the next action (3D Secure etc.)
    requires_payment_method -> hard decline, ask for another card
    succeeded        -> fulfil the order
    """
    status = intent.status
    if status in ("requires_action", "requires_source_action"):
        return {"requiresAction": True, "clientSecret": intent.client_secret}
    if status in ("requires_payment_method", "requires_source"):
        return error_response(CARD_DENIED_MESSAGE)
    if status == "succeeded":
        return {"clientSecret": intent.client_secret}
    return error_response("Failed")


def client_secret_response(intent: Any, payment_method_id: Optional[str] = None) -> dict[str, Any]:
    response = {"clientSecret": intent.client_secret}
    if payment_method_id is not None:
        response["paymentMethodId"] = payment_method_id
    return response


def authentication_required_response(err: AuthenticationRequiredError) -> dict[str, Any]:
    return {
        "error": "authentication_required",
        "paymentMethod": err.payment_method_id,
        "clientSecret": err.client_secret,
        "card": {"brand": err.card_brand, "last4": err.card_last4},
    }


def declined_response(err: PaymentDeclinedError) -> dict[str, Any]:
    return {"error": err.decline_code, "clientSecret": err.client_secret}


def error_response(message: str) -> dict[str, Any]:
    return {"error": message}
