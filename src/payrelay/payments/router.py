"""Stripe checkout API router."""

import logging
from typing import Optional

from fastapi import APIRouter, Header, Query, Request, Response
from fastapi.responses import JSONResponse

from payrelay.common.config import get_settings
from payrelay.common.exceptions import (
    AuthenticationRequiredError,
    PaymentDeclinedError,
    PayRelayError,
    ProcessorError,
    WebhookSignatureError,
)
from payrelay.payments.normalizer import (
    authentication_required_response,
    declined_response,
    error_response,
)
from payrelay.payments.schemas import (
    OffSessionChargeRequest,
    PayRequest,
    PaymentIntentCreate,
    PaymentIntentWithMethodCreate,
    PaymentSheetRequest,
    PaymentSheetResponse,
    SetupIntentCreate,
    SetupIntentResponse,
    StripeKeyResponse,
)
from payrelay.payments.webhook import construct_event, handle_event

logger = logging.getLogger(__name__)

router = APIRouter()

NO_PAYMENT_DETAILS = "Provide a paymentMethodId, a paymentIntentId, or a cvcToken with an email"


def _get_service():
    from payrelay.deps import get_stripe_service
    return get_stripe_service()


def _error(exc: PayRelayError) -> JSONResponse:
    """Every checkout error is a JSON body; only upstream faults change the status."""
    if isinstance(exc, ProcessorError):
        logger.error("Stripe call failed: %s", exc.message)
        return JSONResponse(error_response(exc.message), status_code=502)
    logger.info("Checkout request rejected (%s): %s", exc.code, exc.message)
    return JSONResponse(error_response(exc.message))


@router.get("/stripe-key", response_model=StripeKeyResponse)
async def stripe_key(payment_method: Optional[str] = Query(None, alias="paymentMethod")):
    return StripeKeyResponse(publishable_key=_get_service().publishable_key(payment_method))


@router.post("/create-payment-intent")
async def create_payment_intent(body: PaymentIntentCreate):
    try:
        return await _get_service().create_payment_intent(body)
    except PayRelayError as e:
        return _error(e)


@router.post("/create-payment-intent-with-payment-method")
async def create_payment_intent_with_payment_method(body: PaymentIntentWithMethodCreate):
    try:
        return await _get_service().create_payment_intent_with_payment_method(body)
    except PayRelayError as e:
        return _error(e)


@router.post("/pay-without-webhooks")
async def pay_without_webhooks(body: PayRequest):
    try:
        result = await _get_service().pay(body)
    except AuthenticationRequiredError as e:
        logger.info("Payment needs authentication for %s", e.payment_method_id)
        return authentication_required_response(e)
    except PaymentDeclinedError as e:
        # Hard declines: insufficient funds, expired card, ...
        logger.info("Payment declined: %s", e.decline_code)
        return declined_response(e)
    except PayRelayError as e:
        return _error(e)
    if result is None:
        return JSONResponse(error_response(NO_PAYMENT_DETAILS), status_code=400)
    return result


@router.post("/create-setup-intent", response_model=SetupIntentResponse)
async def create_setup_intent(body: SetupIntentCreate):
    try:
        return await _get_service().create_setup_intent(body)
    except PayRelayError as e:
        return _error(e)


@router.post("/charge-card-off-session")
async def charge_card_off_session(body: OffSessionChargeRequest):
    try:
        return await _get_service().charge_card_off_session(body.email)
    except ProcessorError:
        logger.exception("Unknown error occurred during off-session charge")
        return JSONResponse(error_response("Unknown error occurred"), status_code=500)
    except PayRelayError as e:
        return _error(e)


@router.post("/payment-sheet", response_model=PaymentSheetResponse)
async def payment_sheet(body: PaymentSheetRequest):
    try:
        return await _get_service().create_payment_sheet(body)
    except PayRelayError as e:
        return _error(e)


@router.post("/webhook")
async def stripe_webhook(
    request: Request,
    stripe_signature: str = Header("", alias="Stripe-Signature"),
):
    """Verify and log a Stripe event. Answers 200 for every verified event."""
    payload = await request.body()
    try:
        event = construct_event(payload, stripe_signature, get_settings().stripe_webhook_secret)
    except WebhookSignatureError as e:
        logger.warning("Webhook signature verification failed: %s", e.message)
        return Response(status_code=400)

    try:
        handle_event(event)
    except Exception:
        # Verified deliveries are acknowledged so Stripe does not retry them
        logger.exception("Webhook handler failed for event %s", getattr(event, "id", None))
    return Response(status_code=200)
