import fakeredis
import pytest

from bodega.errors import LedgerUnavailable
from bodega.webhooks.ledger import MemoryEventLedger, RedisEventLedger, build_ledger


def test_memory_ledger_claims_once():
    ledger = MemoryEventLedger(ttl_seconds=60)
    assert ledger.claim("evt_1") is True
    assert ledger.claim("evt_1") is False
    assert ledger.claim("evt_2") is True


def test_memory_ledger_release_allows_replay():
    ledger = MemoryEventLedger(ttl_seconds=60)
    ledger.claim("evt_1")
    ledger.release("evt_1")
    assert ledger.claim("evt_1") is True


def test_memory_ledger_expired_entry_can_be_claimed_again():
    ledger = MemoryEventLedger(ttl_seconds=0)
    assert ledger.claim("evt_1") is True
    assert ledger.claim("evt_1") is True


def test_redis_ledger_uses_prefixed_key_with_ttl():
    client = fakeredis.FakeRedis(decode_responses=True)
    ledger = RedisEventLedger(client, ttl_seconds=120)

    assert ledger.claim("evt_1") is True
    assert ledger.claim("evt_1") is False
    assert client.get("webhook:processed:evt_1") == "1"
    assert 0 < client.ttl("webhook:processed:evt_1") <= 120

    ledger.release("evt_1")
    assert client.exists("webhook:processed:evt_1") == 0
    assert ledger.claim("evt_1") is True


def test_build_ledger_picks_backend():
    assert isinstance(build_ledger(None, 60), MemoryEventLedger)
    assert isinstance(build_ledger(fakeredis.FakeRedis(), 60), RedisEventLedger)


def test_redis_ledger_outage_raises_ledger_unavailable():
    server = fakeredis.FakeServer()
    server.connected = False
    ledger = RedisEventLedger(fakeredis.FakeRedis(server=server), ttl_seconds=60)

    with pytest.raises(LedgerUnavailable):
        ledger.claim("evt_1")
    with pytest.raises(LedgerUnavailable):
        ledger.release("evt_1")
