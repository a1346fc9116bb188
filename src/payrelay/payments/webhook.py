"""Stripe webhook verification and event routing."""

import logging
from typing import Any, Callable

import stripe

from payrelay.common.exceptions import WebhookSignatureError

logger = logging.getLogger(__name__)


def construct_event(payload: bytes, signature_header: str, webhook_secret: str) -> Any:
    """Verify a webhook delivery and return the parsed event.

    Only payloads whose signature checks out against the shared secret become
    events; everything else raises WebhookSignatureError.
    """
    if not signature_header or not webhook_secret:
        raise WebhookSignatureError("Missing signature header or webhook secret")
    try:
        return stripe.Webhook.construct_event(payload, signature_header, webhook_secret)
    except ValueError as exc:
        raise WebhookSignatureError("Invalid webhook payload") from exc
    except stripe.SignatureVerificationError as exc:
        raise WebhookSignatureError() from exc


def _field(obj: Any, name: str) -> Any:
    """Read a field from an SDK object or a plain dict; None when absent."""
    try:
        return obj[name]
    except (KeyError, TypeError):
        return None


def _on_payment_succeeded(obj: Any) -> None:
    # Funds have been captured; fulfil orders and e-mail receipts here.
    logger.info("Webhook received: %s %s", _field(obj, "object"), _field(obj, "status"))
    logger.info("Payment captured: %s", _field(obj, "id"))


def _on_payment_failed(obj: Any) -> None:
    logger.info("Webhook received: %s %s", _field(obj, "object"), _field(obj, "status"))
    logger.info("Payment failed: %s", _field(obj, "id"))


def _on_setup_failed(obj: Any) -> None:
    logger.info("A SetupIntent has failed to set up a PaymentMethod: %s", _field(obj, "id"))


def _on_setup_succeeded(obj: Any) -> None:
    logger.info("A SetupIntent has set up a PaymentMethod for future use: %s", _field(obj, "id"))


def _on_setup_created(obj: Any) -> None:
    logger.info("A new SetupIntent is created: %s", _field(obj, "id"))


EVENT_HANDLERS: dict[str, Callable[[Any], None]] = {
    "payment_intent.succeeded": _on_payment_succeeded,
    "payment_intent.payment_failed": _on_payment_failed,
    "setup_intent.setup_failed": _on_setup_failed,
    "setup_intent.succeeded": _on_setup_succeeded,
    "setup_intent.created": _on_setup_created,
}


def handle_event(event: Any) -> bool:
    """Run the handler for a verified event. Returns False for unhandled types.

    Unknown types are accepted so that new Stripe event types never cause
    deliveries to be retried.
    """
    event_type = event["type"]
    handler = EVENT_HANDLERS.get(event_type)
    if handler is None:
        logger.debug("Ignoring Stripe event type: %s", event_type)
        return False
    handler(event["data"]["object"])
    return True
