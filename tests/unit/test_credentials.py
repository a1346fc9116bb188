"""Tests for regional credential routing."""

import dataclasses

import pytest

from payrelay.common.config import PayRelaySettings
from payrelay.credentials.resolver import (
    METHOD_REGIONS,
    CredentialSet,
    CredentialTable,
    PaymentMethodType,
    Region,
    region_for,
)


def make_settings(**overrides) -> PayRelaySettings:
    defaults = {
        "stripe_publishable_key": "pk_default",
        "stripe_secret_key": "sk_default",
        "stripe_publishable_key_my": "pk_my",
        "stripe_secret_key_my": "sk_my",
        "stripe_publishable_key_au": "pk_au",
        "stripe_secret_key_au": "sk_au",
        "stripe_publishable_key_mx": "pk_mx",
        "stripe_secret_key_mx": "sk_mx",
    }
    defaults.update(overrides)
    return PayRelaySettings(**defaults)


@pytest.fixture
def table():
    return CredentialTable.from_settings(make_settings())


class TestResolve:
    @pytest.mark.parametrize("method,expected", [
        ("grabpay", CredentialSet("sk_my", "pk_my")),
        ("fpx", CredentialSet("sk_my", "pk_my")),
        ("au_becs_debit", CredentialSet("sk_au", "pk_au")),
        ("oxxo", CredentialSet("sk_mx", "pk_mx")),
    ])
    def test_regional_methods(self, table, method, expected):
        assert table.resolve(method) == expected

    @pytest.mark.parametrize("method", [None, "card", "sofort", "ideal", ""])
    def test_everything_else_uses_default(self, table, method):
        assert table.resolve(method) == CredentialSet("sk_default", "pk_default")

    def test_accepts_enum_members(self, table):
        assert table.resolve(PaymentMethodType.OXXO).secret_key == "sk_mx"

    def test_every_mapped_method_resolves_to_its_region(self, table):
        for method, region in METHOD_REGIONS.items():
            assert region_for(method) is region
            assert table.resolve(method) != table.default

    def test_missing_regional_keys_degrade_to_empty(self):
        table = CredentialTable.from_settings(PayRelaySettings(
            stripe_publishable_key="pk_default", stripe_secret_key="sk_default",
        ))
        assert table.resolve("oxxo") == CredentialSet("", "")


class TestCredentialTable:
    def test_requires_default(self):
        with pytest.raises(ValueError):
            CredentialTable({Region.MY: CredentialSet("sk", "pk")})

    def test_sets_are_immutable(self, table):
        with pytest.raises(dataclasses.FrozenInstanceError):
            table.default.secret_key = "sk_other"

    def test_method_table_is_read_only(self):
        with pytest.raises(TypeError):
            METHOD_REGIONS["sepa_debit"] = Region.AU
