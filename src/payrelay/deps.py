"""Dependency injection singletons for PayRelay."""

from payrelay.common.config import PayRelaySettings, get_settings
from payrelay.credentials.resolver import CredentialTable
from payrelay.payments.pricing import PriceTable
from payrelay.payments.service import StripePaymentService
from payrelay.paypal.service import BraintreeService

_credentials: CredentialTable | None = None
_prices: PriceTable | None = None
_stripe: StripePaymentService | None = None
_braintree: BraintreeService | None = None


def get_credentials() -> CredentialTable:
    global _credentials
    if _credentials is None:
        _credentials = CredentialTable.from_settings(get_settings())
    return _credentials


def get_price_table() -> PriceTable:
    global _prices
    if _prices is None:
        settings = get_settings()
        _prices = PriceTable(
            settings.price_catalogue,
            default_price=settings.default_item_price,
            empty_order_amount=settings.default_order_amount,
        )
    return _prices


def get_stripe_service() -> StripePaymentService:
    global _stripe
    if _stripe is None:
        settings = get_settings()
        _stripe = StripePaymentService(
            get_credentials(),
            get_price_table(),
            api_version=settings.stripe_api_version,
            off_session_currency=settings.off_session_currency,
        )
    return _stripe


def get_braintree_service() -> BraintreeService:
    global _braintree
    if _braintree is None:
        _braintree = BraintreeService(get_settings())
    return _braintree


def reset_singletons() -> None:
    """Reset all singletons (for testing)."""
    global _credentials, _prices, _stripe, _braintree
    _credentials = None
    _prices = None
    _stripe = None
    _braintree = None
