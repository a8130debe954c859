"""
Corps de requête des endpoints payment-intents.
"""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from bodega.inventory.models import CartItem


class IntentCreationRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    currency: str = Field(min_length=3, max_length=3)
    customer_id: Optional[str] = Field(default=None, alias="customerId")
    items: List[CartItem] = Field(min_length=1)


class ShippingOptionRef(BaseModel):
    id: str


class IntentShippingChangeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    items: List[CartItem] = Field(min_length=1)
    shipping_option: ShippingOptionRef = Field(alias="shippingOption")


class IntentCurrencyPaymentMethodsChangeRequest(BaseModel):
    currency: str = Field(min_length=3, max_length=3)
    payment_methods: List[str] = Field(min_length=1)
