"""
Cas d'usage 'payments': orchestre panier, stock, total et PaymentIntent Stripe.

Cycle de vie d'un intent (côté Stripe):
    created -> requires_payment_method -> succeeded | failed
    canceled atteignable depuis tout état non terminal.
Ce module ne fait que lire le statut et piloter deux transitions: confirm, cancel.
"""
from typing import Any, Dict, List, Optional
import logging

from bodega.config import Settings
from bodega.errors import (
    InsufficientStock,
    InvalidStockMetadata,
    NoBottlesSelected,
    StatusConflict,
    UnknownShippingOption,
)
from bodega.infra import stripe_client
from bodega.inventory import service as inventory_service
from bodega.inventory.models import CartItem, parse_stock, wine_name
from bodega.inventory.shipping import get_shipping_cost
from bodega.payments.models import (
    IntentCreationRequest,
    IntentCurrencyPaymentMethodsChangeRequest,
    IntentShippingChangeRequest,
)

logger = logging.getLogger(__name__)

# Moyens de paiement liés à une devise: exclus à la création de l'intent
CURRENCY_SPECIFIC_METHODS = ("au_becs_debit",)

AWAITING_PAYMENT_METHOD = "requires_payment_method"

# module bodega.payments.service


def aggregate_quantities(items: List[CartItem]) -> Dict[str, int]:
    """
    Agrège les lignes du panier en {product_id: quantité totale}, dans l'ordre d'apparition.
    """
    quantities: Dict[str, int] = {}
    for item in items:
        quantities[item.parent] = quantities.get(item.parent, 0) + item.quantity
    return quantities


def validate_cart(settings: Settings, items: List[CartItem]) -> Dict[str, int]:
    """
    Vérifie chaque ligne contre le stock Stripe et renvoie les quantités agrégées.
    - quantité <= 0 -> NoBottlesSelected
    - metadata.quantity absent ou non entier -> InvalidStockMetadata
    - quantité demandée > stock -> InsufficientStock
    Chaque erreur nomme le vin concerné.
    """
    wines: Dict[str, Dict[str, Any]] = {}
    for item in items:
        wine = wines.get(item.parent) or inventory_service.get_wine(settings, item.parent)
        wines[item.parent] = wine
        if item.quantity <= 0:
            raise NoBottlesSelected(
                f"Désolé, aucune bouteille de {wine_name(wine)} n'est sélectionnée pour créer le paiement",
                product_id=item.parent,
                product_name=wine_name(wine),
                requested=item.quantity,
            )

    quantities = aggregate_quantities(items)
    for product_id, requested in quantities.items():
        wine = wines[product_id]
        stock = parse_stock(wine)
        if stock is None:
            raise InvalidStockMetadata(
                f"Le stock du vin {wine_name(wine)} est illisible",
                product_id=product_id,
                product_name=wine_name(wine),
                requested=requested,
            )
        if requested > stock:
            raise InsufficientStock(
                f"Désolé, le vin {wine_name(wine)} n'a pas assez de stock pour {requested} bouteilles",
                product_id=product_id,
                product_name=wine_name(wine),
                stock=stock,
                requested=requested,
            )
    return quantities


def initial_payment_methods(settings: Settings) -> List[str]:
    return [m for m in settings.payment_methods if m not in CURRENCY_SPECIFIC_METHODS]


def create_intent(settings: Settings, request: IntentCreationRequest) -> Dict[str, Any]:
    """
    Crée un PaymentIntent après validation du panier.
    - Aucun appel de création si une validation échoue.
    - metadata: {product_id: quantité} pour la réconciliation du stock au webhook.
    """
    quantities = validate_cart(settings, request.items)
    amount = inventory_service.compute_cart_total(settings, request.items)

    params: Dict[str, Any] = {
        "amount": amount,
        "currency": request.currency,
        "payment_method_types": initial_payment_methods(settings),
        "metadata": {product_id: str(qty) for product_id, qty in quantities.items()},
    }
    if request.customer_id:
        params["customer"] = request.customer_id

    intent = stripe_client.create_payment_intent(settings, **params)
    logger.info("payments.create_intent id=%s amount=%s currency=%s", intent.get("id"), amount, request.currency)
    return intent


def retrieve_intent(settings: Settings, intent_id: str) -> Dict[str, Any]:
    return stripe_client.retrieve_payment_intent(settings, intent_id)


def intent_status(settings: Settings, intent_id: str) -> Dict[str, Any]:
    """Statut de l'intent, avec le message de la dernière erreur de paiement si présent."""
    intent = retrieve_intent(settings, intent_id)
    status: Dict[str, Any] = {"status": intent.get("status")}
    last_error = intent.get("last_payment_error") or {}
    if last_error.get("message"):
        status["last_payment_error"] = last_error["message"]
    return status


def update_shipping(settings: Settings, intent_id: str, request: IntentShippingChangeRequest) -> Dict[str, Any]:
    """
    Recalcule le montant: total panier + frais fixes de l'option de livraison.
    - Option inconnue -> UnknownShippingOption (jamais 0 par défaut).
    - Seul le montant de l'intent est mis à jour.
    """
    option_id = request.shipping_option.id
    shipping_cost, found = get_shipping_cost(option_id, settings.shipping_options)
    if not found:
        raise UnknownShippingOption(f"Aucun coût trouvé pour l'option de livraison {option_id!r}")

    amount = inventory_service.compute_cart_total(settings, request.items) + shipping_cost
    return stripe_client.update_payment_intent(settings, intent_id, amount=amount)


def update_currency_and_methods(
    settings: Settings, intent_id: str, request: IntentCurrencyPaymentMethodsChangeRequest
) -> Dict[str, Any]:
    """Remplace devise et moyens de paiement, sans recalcul du stock ni du montant."""
    return stripe_client.update_payment_intent(
        settings,
        intent_id,
        currency=request.currency,
        payment_method_types=list(request.payment_methods),
    )


def confirm_intent(settings: Settings, intent_id: str, payment_source_id: str) -> Dict[str, Any]:
    """
    Confirme l'intent avec la source donnée.
    - Le statut doit être exactement requires_payment_method, sinon StatusConflict
      (protège contre une double confirmation) et aucun appel de confirmation.
    """
    intent = retrieve_intent(settings, intent_id)
    status = intent.get("status")
    if status != AWAITING_PAYMENT_METHOD:
        raise StatusConflict(
            f"Le PaymentIntent {intent_id} a déjà le statut {status}",
            details={"paymentIntent": {"id": intent_id, "status": status}},
        )
    return stripe_client.confirm_payment_intent(settings, intent_id, payment_method=payment_source_id)


def cancel_intent(settings: Settings, intent_id: str) -> Dict[str, Any]:
    """Annulation terminale; l'échec Stripe (ex: déjà annulé) remonte tel quel."""
    intent = stripe_client.cancel_payment_intent(settings, intent_id)
    logger.info("payments.cancel_intent id=%s", intent_id)
    return intent


def describe_failure(intent: Dict[str, Any]) -> Optional[str]:
    """Identifie le moyen de paiement (ou la source) à l'origine d'un échec."""
    last_error = intent.get("last_payment_error") or {}
    method = last_error.get("payment_method") or {}
    if method.get("id"):
        return f"payment_method {method['id']}"
    source = last_error.get("source") or {}
    if source.get("id"):
        return f"source {source['id']}"
    return None
