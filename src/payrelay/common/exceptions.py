"""PayRelay exception hierarchy."""

from typing import Optional


class PayRelayError(Exception):
    """Base exception for all PayRelay errors."""

    def __init__(self, message: str = "", code: str = "PAYRELAY_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class CustomerNotFoundError(PayRelayError):
    """Raised when no processor customer matches the provided e-mail."""

    def __init__(self, message: str = "There is no associated customer object to the provided e-mail"):
        super().__init__(message, code="CUSTOMER_NOT_FOUND")


class PaymentMethodNotFoundError(PayRelayError):
    """Raised when a customer has no saved card to charge."""

    def __init__(
        self,
        message: str = "There is no associated payment method to the provided customer's e-mail",
    ):
        super().__init__(message, code="PAYMENT_METHOD_NOT_FOUND")


class AuthenticationRequiredError(PayRelayError):
    """Raised when the issuer requires the customer to complete a step-up challenge.

    Carries everything the client needs to retry the confirmation on-session
    without re-entering card details.
    """

    def __init__(
        self,
        message: str = "authentication_required",
        payment_method_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        card_brand: Optional[str] = None,
        card_last4: Optional[str] = None,
    ):
        super().__init__(message, code="authentication_required")
        self.payment_method_id = payment_method_id
        self.client_secret = client_secret
        self.card_brand = card_brand
        self.card_last4 = card_last4


class PaymentDeclinedError(PayRelayError):
    """Raised when the processor declines a charge with a decline code."""

    def __init__(self, message: str, decline_code: str, client_secret: Optional[str] = None):
        super().__init__(message, code=decline_code)
        self.decline_code = decline_code
        self.client_secret = client_secret


class WebhookSignatureError(PayRelayError):
    """Raised when an inbound webhook fails payload or signature verification."""

    def __init__(self, message: str = "Webhook signature verification failed"):
        super().__init__(message, code="INVALID_SIGNATURE")


class ProcessorError(PayRelayError):
    """Raised for processor failures that fit no other category."""

    def __init__(self, message: str = "Unknown error occurred"):
        super().__init__(message, code="PROCESSOR_ERROR")
