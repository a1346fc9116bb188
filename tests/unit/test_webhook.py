"""Tests for Stripe webhook verification and event routing."""

import json
from unittest.mock import MagicMock, patch

import pytest

from payrelay.common.exceptions import WebhookSignatureError
from payrelay.payments.webhook import EVENT_HANDLERS, construct_event, handle_event

SECRET = "whsec_unit_secret"


def _payload(event_type: str = "payment_intent.succeeded") -> bytes:
    return json.dumps({
        "id": "evt_1",
        "object": "event",
        "type": event_type,
        "data": {"object": {"id": "pi_1", "object": "payment_intent", "status": "succeeded"}},
    }).encode()


class TestConstructEvent:
    def test_valid_signature(self, sign):
        payload = _payload()
        event = construct_event(payload, sign(payload, SECRET), SECRET)
        assert event["type"] == "payment_intent.succeeded"
        assert event["data"]["object"]["id"] == "pi_1"

    def test_wrong_secret(self, sign):
        payload = _payload()
        with pytest.raises(WebhookSignatureError):
            construct_event(payload, sign(payload, "whsec_other"), SECRET)

    def test_tampered_body(self, sign):
        payload = _payload()
        header = sign(payload, SECRET)
        with pytest.raises(WebhookSignatureError):
            construct_event(_payload("payment_intent.payment_failed"), header, SECRET)

    def test_stale_timestamp(self, sign):
        payload = _payload()
        with pytest.raises(WebhookSignatureError):
            construct_event(payload, sign(payload, SECRET, timestamp=1), SECRET)

    def test_empty_header(self):
        with pytest.raises(WebhookSignatureError):
            construct_event(_payload(), "", SECRET)

    def test_empty_secret_never_verifies(self, sign):
        payload = _payload()
        with pytest.raises(WebhookSignatureError):
            construct_event(payload, sign(payload, ""), "")

    def test_invalid_json(self, sign):
        payload = b"not json"
        with pytest.raises(WebhookSignatureError):
            construct_event(payload, sign(payload, SECRET), SECRET)


class TestHandleEvent:
    def _verified(self, sign, event_type):
        payload = _payload(event_type)
        return construct_event(payload, sign(payload, SECRET), SECRET)

    @pytest.mark.parametrize("event_type", sorted(EVENT_HANDLERS))
    def test_known_types_dispatch(self, sign, event_type):
        handler = MagicMock()
        with patch.dict(EVENT_HANDLERS, {event_type: handler}):
            assert handle_event(self._verified(sign, event_type)) is True
        handler.assert_called_once()
        assert handler.call_args.args[0]["id"] == "pi_1"

    @pytest.mark.parametrize("event_type", sorted(EVENT_HANDLERS))
    def test_verified_events_handled_without_error(self, sign, event_type):
        assert handle_event(self._verified(sign, event_type)) is True

    def test_object_missing_fields(self, sign):
        payload = json.dumps({
            "id": "evt_2",
            "object": "event",
            "type": "setup_intent.created",
            "data": {"object": {"object": "setup_intent"}},
        }).encode()
        assert handle_event(construct_event(payload, sign(payload, SECRET), SECRET)) is True

    def test_plain_dict_events(self):
        for event_type in EVENT_HANDLERS:
            event = {"type": event_type, "data": {"object": {"id": "obj_1", "object": "x"}}}
            assert handle_event(event) is True

    def test_unknown_type_is_ignored(self, sign):
        assert handle_event(self._verified(sign, "charge.dispute.created")) is False

    def test_all_five_types_registered(self):
        assert set(EVENT_HANDLERS) == {
            "payment_intent.succeeded",
            "payment_intent.payment_failed",
            "setup_intent.succeeded",
            "setup_intent.setup_failed",
            "setup_intent.created",
        }
