"""
Couche service de l'enregistrement client.
- Mappe l'adresse sur les formes Stripe `address` et `shipping.address`.
- Replie les champs locaux (NIF/CIF, société, consentement LGPD) dans metadata.
- Un seul appel de création: Stripe est le système de référence.
"""
from typing import Any, Dict
import logging

from bodega.config import Settings
from bodega.customers.models import CustomerInput
from bodega.infra import stripe_client

logger = logging.getLogger(__name__)


def address_params(customer: CustomerInput) -> Dict[str, Any]:
    return {
        "line1": customer.address.street,
        "postal_code": customer.address.postal_code,
        "state": customer.address.province,
        "city": customer.address.city,
        "country": customer.address.country,
    }


def customer_metadata(customer: CustomerInput) -> Dict[str, str]:
    """metadata Stripe; la clé lgpd n'est présente que si le consentement est donné."""
    metadata = {
        "nifCif": customer.nif_cif,
        "company": customer.company,
    }
    if customer.lgpd:
        metadata["lgpd"] = "true"
    return metadata


def build_customer_params(customer: CustomerInput) -> Dict[str, Any]:
    address = address_params(customer)
    shipping: Dict[str, Any] = {"address": address, "name": customer.name}
    params: Dict[str, Any] = {
        "name": customer.name,
        "email": customer.email,
        "address": address,
        "shipping": shipping,
        "metadata": customer_metadata(customer),
    }
    if customer.phone:
        shipping["phone"] = customer.phone
        params["phone"] = customer.phone
    return params


def create_customer(settings: Settings, customer: CustomerInput) -> Dict[str, Any]:
    logger.info("customers.create email=%s", customer.email)
    return stripe_client.create_customer(settings, **build_customer_params(customer))
