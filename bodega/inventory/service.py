"""
Cas d'usage 'inventory': lecture du catalogue Stripe, total panier, stock.

Le stock d'un vin vit dans metadata.quantity du produit Stripe: aucune base
locale, Stripe reste la source de vérité.
"""
from typing import Any, Dict, Iterable, List, Optional
import logging

from bodega.config import Settings
from bodega.errors import RemoteLookupFailure
from bodega.infra import stripe_client
from bodega.inventory.models import CartItem, parse_stock, to_sku

logger = logging.getLogger(__name__)

# module bodega.inventory.service


def visibility_for(settings: Settings) -> Optional[bool]:
    """
    livemode attendu selon l'environnement:
    - development -> produits de test uniquement (False)
    - production  -> produits live uniquement (True)
    - autre       -> pas de filtre (None)
    """
    if settings.is_development:
        return False
    if settings.is_production:
        return True
    return None


def list_wines(settings: Settings, livemode: Optional[bool] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    Liste les vins actifs.
    - limit: taille de page (settings.product_page_size par défaut)
    - livemode: filtre explicite; à défaut, déduit de l'environnement
    """
    wines = stripe_client.list_products(settings, limit=limit or settings.product_page_size, active=True)
    mode = livemode if livemode is not None else visibility_for(settings)
    if mode is None:
        return wines
    return [w for w in wines if bool(w.get("livemode")) is mode]


def get_wine(settings: Settings, wine_id: str) -> Dict[str, Any]:
    return stripe_client.retrieve_product(settings, wine_id)


def list_prices(settings: Settings, product_id: Optional[str] = None, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    return stripe_client.list_prices(settings, limit=limit or settings.price_page_size, product_id=product_id)


def get_price(settings: Settings, price_id: str) -> Dict[str, Any]:
    return stripe_client.retrieve_price(settings, price_id)


def list_skus(settings: Settings, product_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
    """
    SKU d'un vin, servis depuis ses prix (Stripe a remplacé les SKU par les Price).
    - limit: settings.sku_page_size par défaut (1 SKU par appel)
    """
    wine = stripe_client.retrieve_product(settings, product_id)
    prices = stripe_client.list_prices(settings, limit=limit or settings.sku_page_size, product_id=product_id)
    stock = parse_stock(wine)
    return [to_sku(product_id, p, stock) for p in prices]


def unit_amount_for(settings: Settings, product_id: str) -> int:
    """Prix unitaire (unités mineures) = premier prix listé pour le produit."""
    prices = stripe_client.list_prices(settings, limit=settings.price_page_size, product_id=product_id)
    if not prices or prices[0].get("unit_amount") is None:
        raise RemoteLookupFailure(f"Aucun prix trouvé pour le vin {product_id}")
    return int(prices[0]["unit_amount"])


def compute_cart_total(settings: Settings, items: Iterable[CartItem]) -> int:
    """
    Σ(prix unitaire × quantité) sur le panier.
    - Toute recherche en échec fait échouer le calcul (pas de total partiel).
    """
    total = 0
    for item in items:
        total += unit_amount_for(settings, item.parent) * item.quantity
    return total


def update_stock(settings: Settings, product_id: str, new_stock: int) -> Dict[str, Any]:
    """Réécrit metadata.quantity du produit Stripe."""
    logger.info("inventory.update_stock product=%s stock=%s", product_id, new_stock)
    return stripe_client.update_product_metadata(settings, product_id, {"quantity": str(new_stock)})


def decrement_stock(settings: Settings, product_id: str, sold: int) -> Dict[str, Any]:
    """
    Retire `sold` bouteilles du stock courant (plancher à 0).
    - Un stock illisible est traité comme 0.
    """
    wine = stripe_client.retrieve_product(settings, product_id)
    current = parse_stock(wine) or 0
    return update_stock(settings, product_id, max(current - sold, 0))
