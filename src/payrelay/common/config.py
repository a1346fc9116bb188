"""PayRelay configuration via pydantic-settings."""

import json
import warnings
from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# Credentials that must be present before serving real traffic.
_REQUIRED_IN_PRODUCTION = (
    "stripe_publishable_key",
    "stripe_secret_key",
    "stripe_webhook_secret",
)


class PayRelaySettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="PAYRELAY_")

    environment: str = "development"
    log_level: str = "INFO"

    # API
    api_title: str = "PayRelay"
    api_version: str = "0.1.0"
    host: str = "0.0.0.0"
    port: int = 8080
    api_prefix: str = ""
    cors_origins: list[str] = ["http://localhost:3000", "http://localhost:8000"]

    # Stripe: one credential pair per region, the unsuffixed pair is the default.
    # Absent values degrade to empty strings.
    stripe_publishable_key: str = ""
    stripe_secret_key: str = ""
    stripe_publishable_key_my: str = ""
    stripe_secret_key_my: str = ""
    stripe_publishable_key_au: str = ""
    stripe_secret_key_au: str = ""
    stripe_publishable_key_mx: str = ""
    stripe_secret_key_mx: str = ""
    stripe_webhook_secret: str = ""
    stripe_api_version: str = "2020-08-27"

    # Braintree (PayPal) nonce processor
    paypal_environment: str = "sandbox"
    paypal_merchant_id: str = ""
    paypal_public_key: str = ""
    paypal_private_key: str = ""

    # Pricing. item_prices is a JSON object mapping item id to minor units,
    # e.g. '{"photo-subscription": 1000, "e-book": 400}'
    item_prices: str = ""
    default_item_price: int = 0
    default_order_amount: int = 1400  # charged when a request carries no items
    off_session_currency: str = "usd"

    @property
    def price_catalogue(self) -> dict[str, int]:
        """Return item_prices parsed as {item_id: minor_units}."""
        if not self.item_prices:
            return {}
        try:
            raw = json.loads(self.item_prices)
        except (json.JSONDecodeError, TypeError) as exc:
            raise ValueError(
                f"PAYRELAY_ITEM_PRICES must be valid JSON (e.g. '{{\"sku\": 1000}}'), got: {self.item_prices!r}"
            ) from exc
        if not isinstance(raw, dict):
            raise ValueError("PAYRELAY_ITEM_PRICES must be a JSON object")
        for item_id, price in raw.items():
            # Prices are minor units: whole, non-negative numbers only
            if isinstance(price, bool) or not isinstance(price, int) or price < 0:
                raise ValueError(
                    f"PAYRELAY_ITEM_PRICES prices must be non-negative integers in minor units, "
                    f"got {price!r} for {item_id!r}"
                )
        return {str(k): v for k, v in raw.items()}

    def validate_for_production(self) -> None:
        """Raise if required credentials are missing in non-development environments."""
        missing = [field for field in _REQUIRED_IN_PRODUCTION if not getattr(self, field)]

        if self.environment != "development" and missing:
            env_vars = ", ".join(f"PAYRELAY_{f.upper()}" for f in missing)
            raise RuntimeError(
                f"Missing payment credentials in '{self.environment}' environment. "
                f"Set these environment variables: {env_vars}."
            )

        if missing:
            warnings.warn(
                "Stripe credentials are empty; set PAYRELAY_STRIPE_PUBLISHABLE_KEY, "
                "PAYRELAY_STRIPE_SECRET_KEY and PAYRELAY_STRIPE_WEBHOOK_SECRET",
                UserWarning,
                stacklevel=2,
            )


@lru_cache
def get_settings() -> PayRelaySettings:
    settings = PayRelaySettings()
    settings.validate_for_production()
    return settings
