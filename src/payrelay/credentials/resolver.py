"""Regional credential routing.

Some payment methods are only available on Stripe accounts registered in a
specific country, so the API keys used for a request depend on the payment
method the customer picked. The mapping is a fixed table; anything not listed
(including no method at all) uses the default account.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from payrelay.common.config import PayRelaySettings


class PaymentMethodType(str, Enum):
    CARD = "card"
    GRABPAY = "grabpay"
    FPX = "fpx"
    AU_BECS_DEBIT = "au_becs_debit"
    OXXO = "oxxo"


class Region(str, Enum):
    DEFAULT = "default"
    MY = "my"
    AU = "au"
    MX = "mx"


METHOD_REGIONS: Mapping[str, Region] = MappingProxyType({
    PaymentMethodType.GRABPAY.value: Region.MY,
    PaymentMethodType.FPX.value: Region.MY,
    PaymentMethodType.AU_BECS_DEBIT.value: Region.AU,
    PaymentMethodType.OXXO.value: Region.MX,
})


@dataclass(frozen=True)
class CredentialSet:
    """A Stripe account's key pair."""

    secret_key: str
    publishable_key: str


def region_for(method: Optional[str]) -> Region:
    if method is None:
        return Region.DEFAULT
    if isinstance(method, PaymentMethodType):
        method = method.value
    return METHOD_REGIONS.get(method, Region.DEFAULT)


class CredentialTable:
    """Read-only Region -> CredentialSet table, built once at startup."""

    def __init__(self, sets: Mapping[Region, CredentialSet]):
        if Region.DEFAULT not in sets:
            raise ValueError("A default credential set is required")
        self._sets = MappingProxyType(dict(sets))

    @classmethod
    def from_settings(cls, settings: PayRelaySettings) -> "CredentialTable":
        return cls({
            Region.DEFAULT: CredentialSet(
                secret_key=settings.stripe_secret_key,
                publishable_key=settings.stripe_publishable_key,
            ),
            Region.MY: CredentialSet(
                secret_key=settings.stripe_secret_key_my,
                publishable_key=settings.stripe_publishable_key_my,
            ),
            Region.AU: CredentialSet(
                secret_key=settings.stripe_secret_key_au,
                publishable_key=settings.stripe_publishable_key_au,
            ),
            Region.MX: CredentialSet(
                secret_key=settings.stripe_secret_key_mx,
                publishable_key=settings.stripe_publishable_key_mx,
            ),
        })

    @property
    def default(self) -> CredentialSet:
        return self._sets[Region.DEFAULT]

    def resolve(self, method: Optional[str] = None) -> CredentialSet:
        """Return the credential set for a payment method type.

        Total: unknown regions and unrecognised or absent methods fall back
        to the default set.
        """
        return self._sets.get(region_for(method), self.default)
