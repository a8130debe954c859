# module bodega.inventory.views
"""Endpoints catalogue: vins, SKU, prix et configuration publique du storefront.
- GET /config: clé publique Stripe, pays, devise, moyens de paiement, livraisons.
- GET /wines, /wines/{id}, /wines/{id}/skus, /wines/{id}/prices
- GET /prices (?product=), /prices/{id}
Les listes sont renvoyées dans l'enveloppe {"data": [...]}, les objets seuls tels quels.
"""
from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends

from bodega.config import Settings
from bodega.inventory import service as inventory_service
from bodega.inventory.models import listing
from bodega.utils.dependencies import get_settings

router = APIRouter(tags=["Catalogue"])


@router.get("/config")
def get_config(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return settings.public_config()


@router.get("/wines")
def get_wines(settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return listing(inventory_service.list_wines(settings))


@router.get("/wines/{wine_id}")
def get_wine(wine_id: str, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return inventory_service.get_wine(settings, wine_id)


@router.get("/wines/{wine_id}/skus")
def get_wine_skus(wine_id: str, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return listing(inventory_service.list_skus(settings, wine_id))


@router.get("/wines/{wine_id}/prices")
def get_wine_prices(wine_id: str, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return listing(inventory_service.list_prices(settings, product_id=wine_id))


@router.get("/prices")
def get_prices(product: Optional[str] = None, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return listing(inventory_service.list_prices(settings, product_id=product))


@router.get("/prices/{price_id}")
def get_price(price_id: str, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return inventory_service.get_price(settings, price_id)
