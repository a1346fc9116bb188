"""Tests for the payrelay CLI."""

import pytest
from typer.testing import CliRunner

from payrelay.cli import app

runner = CliRunner()


@pytest.fixture
def configured(monkeypatch):
    monkeypatch.setenv("PAYRELAY_STRIPE_SECRET_KEY", "sk_test_default_1234567890")
    monkeypatch.setenv("PAYRELAY_STRIPE_PUBLISHABLE_KEY", "pk_test_default_1234567890")
    monkeypatch.setenv("PAYRELAY_STRIPE_WEBHOOK_SECRET", "whsec_x")

    from payrelay.common.config import get_settings
    from payrelay.deps import reset_singletons
    get_settings.cache_clear()
    reset_singletons()
    yield
    get_settings.cache_clear()
    reset_singletons()


def test_keys_default_region(configured):
    result = runner.invoke(app, ["keys"])
    assert result.exit_code == 0
    assert "default" in result.output
    assert "1234567890" not in result.output  # keys are masked


def test_keys_unconfigured_region_fails(configured):
    result = runner.invoke(app, ["keys", "oxxo"])
    assert result.exit_code == 1
    assert "mx" in result.output
