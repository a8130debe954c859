"""
Registre des événements webhook déjà traités (déduplication par event id).

Stripe livre au moins une fois: un même événement peut arriver plusieurs fois.
claim() réserve l'identifiant avant traitement; release() le libère si le
traitement échoue, pour qu'une relivraison puisse le rejouer.
"""
from typing import Dict, Optional, Protocol
import logging
import threading
import time

import redis

from bodega.errors import LedgerUnavailable

logger = logging.getLogger(__name__)

KEY_PREFIX = "webhook:processed:"


class EventLedger(Protocol):
    def claim(self, event_id: str) -> bool:
        """True si l'événement n'a jamais été vu (et le marque comme traité)."""
        ...

    def release(self, event_id: str) -> None:
        ...


class RedisEventLedger:
    """Registre partagé entre process: SET NX EX sur webhook:processed:<event_id>."""

    def __init__(self, client: redis.Redis, ttl_seconds: int = 7 * 24 * 3600):
        self.client = client
        self.ttl_seconds = ttl_seconds

    def claim(self, event_id: str) -> bool:
        try:
            claimed = self.client.set(f"{KEY_PREFIX}{event_id}", "1", nx=True, ex=self.ttl_seconds)
        except redis.RedisError as e:
            raise LedgerUnavailable(f"Registre webhook indisponible: {e}") from e
        return bool(claimed)

    def release(self, event_id: str) -> None:
        try:
            self.client.delete(f"{KEY_PREFIX}{event_id}")
        except redis.RedisError as e:
            raise LedgerUnavailable(f"Registre webhook indisponible: {e}") from e


class MemoryEventLedger:
    """Registre local au process (dev, mono-worker); expiration paresseuse."""

    def __init__(self, ttl_seconds: int = 7 * 24 * 3600):
        self.ttl_seconds = ttl_seconds
        self._seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def claim(self, event_id: str) -> bool:
        now = time.monotonic()
        with self._lock:
            expires_at = self._seen.get(event_id)
            if expires_at is not None and expires_at > now:
                return False
            self._seen[event_id] = now + self.ttl_seconds
            return True

    def release(self, event_id: str) -> None:
        with self._lock:
            self._seen.pop(event_id, None)


def build_ledger(client: Optional[redis.Redis], ttl_seconds: int) -> EventLedger:
    if client is None:
        logger.info("Webhook ledger: in-memory (aucun REDIS_URL)")
        return MemoryEventLedger(ttl_seconds)
    logger.info("Webhook ledger: redis")
    return RedisEventLedger(client, ttl_seconds)
