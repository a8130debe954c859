import hashlib
import hmac
import json
import time

import pytest

from bodega.errors import AuthenticationFailure, MalformedInput
from bodega.webhooks.signature import read_event

SECRET = "whsec_test_secret"


def _sign(payload: str, secret: str = SECRET) -> str:
    timestamp = int(time.time())
    digest = hmac.new(secret.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
    return f"t={timestamp},v1={digest}"


@pytest.fixture
def signed_settings(settings):
    return settings.model_copy(update={"webhook_secret": SECRET, "webhook_allow_unsigned": False})


def test_valid_signature_returns_payload(signed_settings):
    payload = json.dumps({"id": "evt_1", "type": "payment_intent.succeeded"})
    event = read_event(signed_settings, payload.encode("utf-8"), _sign(payload))
    assert event["id"] == "evt_1"


def test_signature_with_other_secret_is_rejected(signed_settings):
    payload = json.dumps({"id": "evt_1"})
    with pytest.raises(AuthenticationFailure) as exc:
        read_event(signed_settings, payload.encode("utf-8"), _sign(payload, "whsec_other"))
    assert exc.value.status_code == 401


def test_missing_signature_header_is_rejected(signed_settings):
    with pytest.raises(AuthenticationFailure):
        read_event(signed_settings, b'{"id": "evt_1"}', None)


def test_unsigned_refused_without_explicit_mode(settings):
    locked = settings.model_copy(update={"webhook_secret": "", "webhook_allow_unsigned": False})
    with pytest.raises(AuthenticationFailure):
        read_event(locked, b'{"id": "evt_1"}', None)


def test_unsigned_accepted_in_explicit_mode(settings):
    assert read_event(settings, b'{"id": "evt_1"}', None) == {"id": "evt_1"}


@pytest.mark.parametrize("raw", [b"{not json", b"\xff\xfe"])
def test_unreadable_payload_is_malformed(settings, raw):
    with pytest.raises(MalformedInput) as exc:
        read_event(settings, raw, None)
    assert exc.value.status_code == 400


def test_stale_timestamp_is_rejected(signed_settings):
    payload = json.dumps({"id": "evt_1", "type": "payment_intent.succeeded"})
    timestamp = int(time.time()) - 30 * 24 * 3600
    digest = hmac.new(SECRET.encode("utf-8"), f"{timestamp}.{payload}".encode("utf-8"), hashlib.sha256).hexdigest()
    with pytest.raises(AuthenticationFailure):
        read_event(signed_settings, payload.encode("utf-8"), f"t={timestamp},v1={digest}")
