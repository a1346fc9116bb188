"""PayRelay: checkout relay for Stripe and Braintree."""

from payrelay.credentials.resolver import CredentialSet, CredentialTable, PaymentMethodType
from payrelay.payments.dispatcher import PaymentDispatcher
from payrelay.payments.pricing import OrderItem, PriceTable

__all__ = [
    "CredentialSet",
    "CredentialTable",
    "PaymentMethodType",
    "PaymentDispatcher",
    "OrderItem",
    "PriceTable",
]
__version__ = "0.1.0"
