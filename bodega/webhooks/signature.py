"""
Lecture authentifiée du payload webhook.

- Secret configuré: la signature Stripe-Signature est vérifiée par le SDK.
- Pas de secret: le payload n'est accepté non signé que si le mode
  WEBHOOK_ALLOW_UNSIGNED est explicitement activé (dev local), sinon refus.
"""
from typing import Any, Dict, Optional
import json
import logging

import stripe

from bodega.config import Settings
from bodega.errors import AuthenticationFailure, MalformedInput
from bodega.infra import stripe_client

logger = logging.getLogger(__name__)


def read_event(settings: Settings, raw_payload: bytes, signature_header: Optional[str]) -> Dict[str, Any]:
    try:
        payload = raw_payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedInput("Payload webhook non UTF-8") from e

    if settings.webhook_secret:
        try:
            stripe_client.verify_signature(payload, signature_header, settings.webhook_secret)
        except stripe.SignatureVerificationError as e:
            logger.warning("webhook signature rejected: %s", e)
            raise AuthenticationFailure("Signature webhook invalide") from e
    elif not settings.webhook_allow_unsigned:
        raise AuthenticationFailure("Aucun secret webhook configuré et mode non signé désactivé")
    else:
        # Dev only (non sécurisé)
        logger.debug("webhook accepted without signature (WEBHOOK_ALLOW_UNSIGNED)")

    try:
        return json.loads(payload)
    except json.JSONDecodeError as e:
        raise MalformedInput(f"Payload webhook invalide: {e}") from e
