import logging
from typing import Any, Dict

from fastapi import APIRouter, Depends

from bodega.config import Settings
from bodega.payments import service as payments_service
from bodega.payments.models import (
    IntentCreationRequest,
    IntentCurrencyPaymentMethodsChangeRequest,
    IntentShippingChangeRequest,
)
from bodega.utils.dependencies import get_settings
from bodega.utils.rate_limit import optional_rate_limit

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/payment-intents", tags=["Payment Intents"])

# module bodega.payments.views


@router.post("", dependencies=[Depends(optional_rate_limit(times=10, seconds=60))])
def create_payment_intent(body: IntentCreationRequest, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    """
    Crée un PaymentIntent pour le panier.
    - Entrée JSON: {"currency": "eur", "customerId": "cus_...", "items": [{"parent": "<wine_id>", "quantity": 2}]}
    - 406 {message, code, meta: {wines: [{id, name, stock, requested}]}} si une ligne est refusée
    - Réponse: {"paymentIntent": {...}}
    """
    intent = payments_service.create_intent(settings, body)
    return {"paymentIntent": intent}


@router.post("/{intent_id}/shipping-change")
def change_shipping(
    intent_id: str, body: IntentShippingChangeRequest, settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """Ajoute les frais de l'option de livraison au total panier (400 si option inconnue)."""
    intent = payments_service.update_shipping(settings, intent_id, body)
    return {"paymentIntent": intent}


@router.post("/{intent_id}/currency")
def change_currency(
    intent_id: str, body: IntentCurrencyPaymentMethodsChangeRequest, settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    intent = payments_service.update_currency_and_methods(settings, intent_id, body)
    return {"paymentIntent": intent}


@router.get("/{intent_id}/status")
def get_status(intent_id: str, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return {"paymentIntent": payments_service.intent_status(settings, intent_id)}
