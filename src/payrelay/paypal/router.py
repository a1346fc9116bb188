"""Braintree (PayPal) nonce checkout router."""

import logging

from fastapi import APIRouter, Request
from pydantic import ValidationError

from payrelay.common.exceptions import PayRelayError
from payrelay.paypal.schemas import ClientTokenResponse, NonceCheckoutRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_service():
    from payrelay.deps import get_braintree_service
    return get_braintree_service()


@router.get("/create_token", response_model=ClientTokenResponse, response_model_exclude_none=True)
async def create_token():
    try:
        token = await _get_service().create_client_token()
    except PayRelayError as e:
        logger.warning("Client token generation failed: %s", e.message)
        return ClientTokenResponse(success=False)
    return ClientTokenResponse(client_token=token, success=True)


@router.post("/checkout")
async def checkout(request: Request):
    """Charge a nonce. Every failure, including a malformed body, is {"success": false}."""
    try:
        body = NonceCheckoutRequest.model_validate_json(await request.body())
    except ValidationError as e:
        logger.info("Rejected nonce checkout body: %d validation error(s)", e.error_count())
        return {"success": False}

    try:
        return await _get_service().checkout(body.payment_method_nonce, body.amount)
    except PayRelayError as e:
        logger.warning("Nonce checkout failed: %s", e.message)
        return {"success": False}
