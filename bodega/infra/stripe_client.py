"""
Adaptateur Stripe: centralise les appels SDK et la conversion des erreurs.

- Chaque appel reçoit la clé API depuis Settings (api_key par requête, pas de
  stripe.api_key global).
- Les objets Stripe sont convertis en dict simples (to_plain) avant de sortir
  du module: les services et les vues ne manipulent que des dict.
- Les erreurs SDK deviennent des erreurs métier (bodega.errors).
"""
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional, Type
import logging

import stripe

from bodega.config import Settings
from bodega.errors import NotFound, RemoteLookupFailure, RemoteOperationFailure

logger = logging.getLogger(__name__)

# module bodega.infra.stripe_client


def to_plain(obj: Any) -> Dict[str, Any]:
    """Convertit un StripeObject (ou un dict) en dict Python récursif."""
    if obj is None:
        return {}
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return dict(obj)


@contextmanager
def _stripe_errors(
    action: str,
    resource_id: Optional[str] = None,
    failure: Type[Exception] = RemoteLookupFailure,
) -> Iterator[None]:
    """
    Traduit les exceptions Stripe:
    - InvalidRequestError(code=resource_missing) -> NotFound
    - toute autre StripeError -> failure (RemoteLookupFailure pour les lectures)
    """
    try:
        yield
    except stripe.InvalidRequestError as e:
        if getattr(e, "code", None) == "resource_missing":
            raise NotFound(f"{action}: ressource introuvable ({resource_id})") from e
        logger.warning("stripe.%s invalid request id=%s: %s", action, resource_id, e)
        raise failure(f"{action}: requête refusée par Stripe ({e.user_message or e})") from e
    except stripe.StripeError as e:
        logger.warning("stripe.%s failed id=%s: %s", action, resource_id, e)
        raise failure(f"{action}: échec de l'appel Stripe ({e})") from e


# --- Catalogue -------------------------------------------------------------

def list_products(settings: Settings, *, limit: int, active: bool = True) -> List[Dict[str, Any]]:
    with _stripe_errors("listing failed (products)"):
        page = stripe.Product.list(api_key=settings.stripe_secret_key, limit=limit, active=active)
    return [to_plain(p) for p in page.data]


def retrieve_product(settings: Settings, product_id: str) -> Dict[str, Any]:
    with _stripe_errors("product lookup", product_id):
        product = stripe.Product.retrieve(product_id, api_key=settings.stripe_secret_key)
    return to_plain(product)


def update_product_metadata(settings: Settings, product_id: str, metadata: Dict[str, str]) -> Dict[str, Any]:
    """Stripe fusionne les clés de metadata: seules les clés fournies sont réécrites."""
    with _stripe_errors("product update", product_id, RemoteOperationFailure):
        product = stripe.Product.modify(product_id, api_key=settings.stripe_secret_key, metadata=metadata)
    return to_plain(product)


def list_prices(settings: Settings, *, limit: int, product_id: Optional[str] = None) -> List[Dict[str, Any]]:
    params: Dict[str, Any] = {"limit": limit}
    if product_id:
        params["product"] = product_id
    with _stripe_errors("listing failed (prices)", product_id):
        page = stripe.Price.list(api_key=settings.stripe_secret_key, **params)
    return [to_plain(p) for p in page.data]


def retrieve_price(settings: Settings, price_id: str) -> Dict[str, Any]:
    with _stripe_errors("price lookup", price_id):
        price = stripe.Price.retrieve(price_id, api_key=settings.stripe_secret_key)
    return to_plain(price)


# --- PaymentIntents --------------------------------------------------------

def create_payment_intent(settings: Settings, **params: Any) -> Dict[str, Any]:
    """
    Crée un PaymentIntent.
    - params: amount, currency, payment_method_types, metadata, customer (optionnel)
    """
    with _stripe_errors("payment intent creation", failure=RemoteOperationFailure):
        intent = stripe.PaymentIntent.create(api_key=settings.stripe_secret_key, **params)
    return to_plain(intent)


def retrieve_payment_intent(settings: Settings, intent_id: str) -> Dict[str, Any]:
    with _stripe_errors("payment intent lookup", intent_id):
        intent = stripe.PaymentIntent.retrieve(intent_id, api_key=settings.stripe_secret_key)
    return to_plain(intent)


def update_payment_intent(settings: Settings, intent_id: str, **params: Any) -> Dict[str, Any]:
    with _stripe_errors("payment intent update", intent_id, RemoteOperationFailure):
        intent = stripe.PaymentIntent.modify(intent_id, api_key=settings.stripe_secret_key, **params)
    return to_plain(intent)


def confirm_payment_intent(settings: Settings, intent_id: str, payment_method: str) -> Dict[str, Any]:
    with _stripe_errors("payment intent confirmation", intent_id, RemoteOperationFailure):
        intent = stripe.PaymentIntent.confirm(
            intent_id, api_key=settings.stripe_secret_key, payment_method=payment_method
        )
    return to_plain(intent)


def cancel_payment_intent(settings: Settings, intent_id: str) -> Dict[str, Any]:
    with _stripe_errors("payment intent cancellation", intent_id, RemoteOperationFailure):
        intent = stripe.PaymentIntent.cancel(intent_id, api_key=settings.stripe_secret_key)
    return to_plain(intent)


# --- Customers -------------------------------------------------------------

def create_customer(settings: Settings, **params: Any) -> Dict[str, Any]:
    with _stripe_errors("customer creation", failure=RemoteOperationFailure):
        customer = stripe.Customer.create(api_key=settings.stripe_secret_key, **params)
    return to_plain(customer)


# --- Webhooks --------------------------------------------------------------

def verify_signature(payload: str, signature_header: Optional[str], secret: str) -> None:
    """
    Vérifie l'en-tête Stripe-Signature (lève stripe.SignatureVerificationError sinon).
    - Horodatage plus vieux que la tolérance Stripe (300 s): refusé (rejeu).
    """
    stripe.WebhookSignature.verify_header(
        payload, signature_header or "", secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE
    )
