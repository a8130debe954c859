"""Couche service du webhook Stripe (panier).
Rôles:
- Dédupliquer par event id (EventLedger) pour supporter la livraison au-moins-une-fois.
- payment_intent.succeeded: décrémenter le stock de chaque vin listé dans metadata.
- payment_intent.payment_failed: tracer le moyen de paiement en cause.
- source chargeable: confirmer l'intent associé; source failed/canceled: l'annuler.
Mise à jour du stock: best-effort, non transactionnelle. Un échec sur un vin est
tracé et n'annule pas les mises à jour déjà appliquées aux autres.
"""
from typing import List
import logging

from bodega.config import Settings
from bodega.errors import BodegaError, LedgerUnavailable
from bodega.inventory import service as inventory_service
from bodega.payments import service as payments_service
from bodega.webhooks.events import PaymentIntentEvent, SourceEvent, UnrecognizedEvent, WebhookEvent
from bodega.webhooks.ledger import EventLedger

logger = logging.getLogger(__name__)

SOURCE_INTENT_KEY = "paymentIntent"


def handle(settings: Settings, ledger: EventLedger, event: WebhookEvent) -> bool:
    """
    Route l'événement vers son handler et renvoie handled.
    - Un événement déjà traité (même id) est ignoré: handled=False, aucun effet.
    - En cas d'exception, l'id est libéré puis l'exception remonte.
    """
    if isinstance(event, UnrecognizedEvent):
        logger.info("webhook ignored kind=%s type=%s id=%s", event.kind, event.type, event.id)
        return False

    if not ledger.claim(event.id):
        logger.info("webhook duplicate id=%s type=%s", event.id, event.type)
        return False

    try:
        if isinstance(event, PaymentIntentEvent):
            return on_payment_intent_event(settings, event)
        return on_source_event(settings, event)
    except Exception:
        try:
            ledger.release(event.id)
        except LedgerUnavailable:
            logger.exception("webhook: libération impossible pour id=%s", event.id)
        raise


def on_payment_intent_event(settings: Settings, event: PaymentIntentEvent) -> bool:
    intent = event.intent
    intent_id = intent.get("id")

    if event.type == "payment_intent.succeeded":
        logger.info("webhook: paiement réussi pour le PaymentIntent %s", intent_id)
        failures = update_stock_from_metadata(settings, intent.get("metadata") or {})
        if failures:
            logger.warning("webhook: stock non mis à jour pour %s (intent=%s)", ", ".join(failures), intent_id)
        return True

    if event.type == "payment_intent.payment_failed":
        culprit = payments_service.describe_failure(intent) or "moyen de paiement inconnu"
        logger.info("webhook: paiement sur %s en échec pour le PaymentIntent %s", culprit, intent_id)
        return True

    return False


def update_stock_from_metadata(settings: Settings, metadata: dict) -> List[str]:
    """
    Une mise à jour de stock par entrée {product_id: quantité}.
    Retourne les product_id en échec (best-effort, pas de rollback).
    """
    failures: List[str] = []
    for product_id, raw_quantity in metadata.items():
        try:
            sold = int(str(raw_quantity).strip())
        except ValueError:
            logger.warning("webhook: quantité illisible %r pour %s", raw_quantity, product_id)
            failures.append(product_id)
            continue
        try:
            inventory_service.decrement_stock(settings, product_id, sold)
        except BodegaError:
            logger.exception("webhook: échec de mise à jour du stock pour %s", product_id)
            failures.append(product_id)
    return failures


def on_source_event(settings: Settings, event: SourceEvent) -> bool:
    source = event.source
    intent_id = (source.get("metadata") or {}).get(SOURCE_INTENT_KEY)
    if not intent_id:
        return False

    status = source.get("status")
    if status == "chargeable":
        logger.info("webhook: la source %s est débitable", source.get("id"))
        payments_service.confirm_intent(settings, intent_id, source.get("id"))
        return True
    if status in ("failed", "canceled"):
        logger.info("webhook: source %s %s, annulation de %s", source.get("id"), status, intent_id)
        payments_service.cancel_intent(settings, intent_id)
        return True
    return False
