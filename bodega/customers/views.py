# module bodega.customers.views
"""Endpoint d'enregistrement client.
- POST /customers: crée le client Stripe (400 si le corps est mal formé, rate-limité).
"""
from typing import Any, Dict

from fastapi import APIRouter, Depends

from bodega.config import Settings
from bodega.customers import service as customers_service
from bodega.customers.models import CustomerInput
from bodega.utils.dependencies import get_settings
from bodega.utils.rate_limit import optional_rate_limit

router = APIRouter(prefix="/customers", tags=["Customers"])


@router.post("", dependencies=[Depends(optional_rate_limit(times=5, seconds=60))])
def create_customer(body: CustomerInput, settings: Settings = Depends(get_settings)) -> Dict[str, Any]:
    return customers_service.create_customer(settings, body)
