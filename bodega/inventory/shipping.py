"""
Options de livraison statiques (définies localement, pas côté Stripe).
"""
from typing import Tuple

from pydantic import BaseModel, ConfigDict


class ShippingOption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    label: str
    detail: str
    amount: int  # unités mineures (centimes)


SHIPPING_OPTIONS: Tuple[ShippingOption, ...] = (
    ShippingOption(id="free", label="Free Shipping", detail="Delivery within 5 days", amount=0),
    ShippingOption(id="express", label="Express Shipping", detail="Next day delivery", amount=500),
)


def shipping_options() -> Tuple[ShippingOption, ...]:
    return SHIPPING_OPTIONS


def get_shipping_cost(option_id: str, options: Tuple[ShippingOption, ...] = SHIPPING_OPTIONS) -> Tuple[int, bool]:
    """
    Retourne (montant, trouvé) pour l'option demandée.
    - Un identifiant inconnu renvoie (0, False): l'appelant doit refuser, jamais supposer 0.
    """
    for option in options:
        if option.id == option_id:
            return option.amount, True
    return 0, False
