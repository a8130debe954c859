"""
Modèles du catalogue: lignes de panier et métadonnées de vin.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CartItem(BaseModel):
    """
    Ligne de panier {parent, quantity}.
    quantity n'est pas bornée ici: une quantité <= 0 doit produire une erreur
    nommant le vin (NoBottlesSelected), pas un 400 générique.
    """

    parent: str = Field(min_length=1)
    quantity: int


class WineMetadata(BaseModel):
    """Métadonnées Stripe d'un vin (toutes en chaînes côté Stripe)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    barrel: Optional[str] = None
    brand_image: Optional[str] = Field(default=None, alias="brandImage")
    capacity: Optional[str] = None
    cellar: Optional[str] = None
    cellar_url: Optional[str] = Field(default=None, alias="cellarURL")
    color: Optional[str] = None
    cork: Optional[str] = None
    do: Optional[str] = None
    do_image: Optional[str] = Field(default=None, alias="doImage")
    graduation: Optional[str] = None
    grape: Optional[str] = None
    placeholder_image: Optional[str] = Field(default=None, alias="placeholderImage")
    path: Optional[str] = None
    quantity: Optional[str] = None
    where: Optional[str] = None


def wine_metadata(product: Dict[str, Any]) -> WineMetadata:
    return WineMetadata.model_validate((product or {}).get("metadata") or {})


def wine_name(product: Dict[str, Any]) -> str:
    return (product or {}).get("name") or str((product or {}).get("id") or "")


def parse_stock(product: Dict[str, Any]) -> Optional[int]:
    """Stock entier lu dans metadata.quantity, None si absent ou illisible."""
    raw = wine_metadata(product).quantity
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return None


def to_sku(product_id: str, price: Dict[str, Any], stock: Optional[int]) -> Dict[str, Any]:
    """Vue SKU (héritée de l'API SKU Stripe retirée) construite depuis un Price."""
    return {
        "id": price.get("id"),
        "object": "sku",
        "product": product_id,
        "price": price.get("id"),
        "unit_amount": price.get("unit_amount"),
        "currency": price.get("currency"),
        "inventory": {"type": "finite", "quantity": stock},
    }


def listing(data: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Enveloppe des endpoints de liste: {"data": [...]}."""
    return {"data": data}
