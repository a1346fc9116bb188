"""Shared test fixtures for PayRelay."""

import hashlib
import hmac
import time

import pytest
from httpx import ASGITransport, AsyncClient


WEBHOOK_SECRET = "whsec_test_secret"

TEST_ENV = {
    "PAYRELAY_ENVIRONMENT": "development",
    "PAYRELAY_STRIPE_PUBLISHABLE_KEY": "pk_test_default",
    "PAYRELAY_STRIPE_SECRET_KEY": "sk_test_default",
    "PAYRELAY_STRIPE_PUBLISHABLE_KEY_MY": "pk_test_my",
    "PAYRELAY_STRIPE_SECRET_KEY_MY": "sk_test_my",
    "PAYRELAY_STRIPE_PUBLISHABLE_KEY_AU": "pk_test_au",
    "PAYRELAY_STRIPE_SECRET_KEY_AU": "sk_test_au",
    "PAYRELAY_STRIPE_PUBLISHABLE_KEY_MX": "pk_test_mx",
    "PAYRELAY_STRIPE_SECRET_KEY_MX": "sk_test_mx",
    "PAYRELAY_STRIPE_WEBHOOK_SECRET": WEBHOOK_SECRET,
    "PAYRELAY_PAYPAL_MERCHANT_ID": "merchant_test",
    "PAYRELAY_PAYPAL_PUBLIC_KEY": "public_test",
    "PAYRELAY_PAYPAL_PRIVATE_KEY": "private_test",
    "PAYRELAY_ITEM_PRICES": '{"photo-subscription": 1000, "e-book": 400}',
}


def sign_payload(payload: bytes, secret: str = WEBHOOK_SECRET, timestamp: int | None = None) -> str:
    """Build a Stripe-Signature header (v1 scheme) for a payload."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    signed = f"{timestamp}.".encode() + payload
    sig = hmac.new(secret.encode(), signed, hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={sig}"


@pytest.fixture
def webhook_secret():
    return WEBHOOK_SECRET


@pytest.fixture
def sign():
    return sign_payload


@pytest.fixture
def app(monkeypatch):
    """Create a test app with test credentials."""
    for key, value in TEST_ENV.items():
        monkeypatch.setenv(key, value)

    # Clear caches and singletons so new env vars take effect
    from payrelay.common.config import get_settings
    get_settings.cache_clear()

    from payrelay.deps import reset_singletons
    reset_singletons()

    from payrelay.app import create_app
    yield create_app()

    get_settings.cache_clear()
    reset_singletons()


@pytest.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
