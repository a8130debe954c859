import itertools
from typing import Any, Dict, Generator, List, Optional

import pytest
from fastapi.testclient import TestClient

from bodega.app_setup.factory import create_app
from bodega.config import Settings
from bodega.errors import NotFound, RemoteOperationFailure
from bodega.infra import stripe_client


# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)


class FakeStripe:
    """
    Catalogue / PaymentIntents / Customers Stripe en mémoire.
    Expose les mêmes fonctions que bodega.infra.stripe_client et trace chaque appel.
    """

    def __init__(self):
        self.products: Dict[str, Dict[str, Any]] = {}
        self.prices: Dict[str, List[Dict[str, Any]]] = {}
        self.intents: Dict[str, Dict[str, Any]] = {}
        self.customers: List[Dict[str, Any]] = []
        self.calls: List[tuple] = []
        self._ids = itertools.count(1)

    # --- seed ---
    def add_wine(self, wine_id: str, name: str, stock: Optional[str] = "10", unit_amount: Optional[int] = 1500,
                 livemode: bool = False, currency: str = "eur") -> Dict[str, Any]:
        metadata = {"color": "tinto"}
        if stock is not None:
            metadata["quantity"] = stock
        self.products[wine_id] = {
            "id": wine_id, "object": "product", "name": name, "images": [],
            "livemode": livemode, "active": True, "metadata": metadata,
        }
        self.prices[wine_id] = []
        if unit_amount is not None:
            self.prices[wine_id].append({
                "id": f"price_{wine_id}", "object": "price", "product": wine_id,
                "unit_amount": unit_amount, "currency": currency,
            })
        return self.products[wine_id]

    def add_intent(self, status: str = "requires_payment_method", **fields) -> Dict[str, Any]:
        intent_id = f"pi_{next(self._ids)}"
        self.intents[intent_id] = {"id": intent_id, "object": "payment_intent", "status": status,
                                   "amount": 0, "currency": "eur", "metadata": {}, **fields}
        return self.intents[intent_id]

    def called(self, name: str) -> List[tuple]:
        return [c for c in self.calls if c[0] == name]

    # --- stripe_client API ---
    def list_products(self, settings, *, limit, active=True):
        self.calls.append(("list_products", {"limit": limit, "active": active}))
        return [dict(p) for p in self.products.values() if p["active"] == active][:limit]

    def retrieve_product(self, settings, product_id):
        self.calls.append(("retrieve_product", product_id))
        if product_id not in self.products:
            raise NotFound(f"product lookup: ressource introuvable ({product_id})")
        return dict(self.products[product_id], metadata=dict(self.products[product_id]["metadata"]))

    def update_product_metadata(self, settings, product_id, metadata):
        self.calls.append(("update_product_metadata", product_id, dict(metadata)))
        if product_id not in self.products:
            raise NotFound(f"product update: ressource introuvable ({product_id})")
        self.products[product_id]["metadata"].update(metadata)
        return dict(self.products[product_id])

    def list_prices(self, settings, *, limit, product_id=None):
        self.calls.append(("list_prices", {"limit": limit, "product_id": product_id}))
        if product_id is not None:
            return list(self.prices.get(product_id, []))[:limit]
        return [p for prices in self.prices.values() for p in prices][:limit]

    def retrieve_price(self, settings, price_id):
        self.calls.append(("retrieve_price", price_id))
        for prices in self.prices.values():
            for p in prices:
                if p["id"] == price_id:
                    return dict(p)
        raise NotFound(f"price lookup: ressource introuvable ({price_id})")

    def create_payment_intent(self, settings, **params):
        self.calls.append(("create_payment_intent", params))
        intent_id = f"pi_{next(self._ids)}"
        intent = {"id": intent_id, "object": "payment_intent", "status": "requires_payment_method",
                  "client_secret": f"{intent_id}_secret", **params}
        self.intents[intent_id] = intent
        return dict(intent)

    def retrieve_payment_intent(self, settings, intent_id):
        self.calls.append(("retrieve_payment_intent", intent_id))
        if intent_id not in self.intents:
            raise NotFound(f"payment intent lookup: ressource introuvable ({intent_id})")
        return dict(self.intents[intent_id])

    def update_payment_intent(self, settings, intent_id, **params):
        self.calls.append(("update_payment_intent", intent_id, params))
        if intent_id not in self.intents:
            raise NotFound(f"payment intent update: ressource introuvable ({intent_id})")
        self.intents[intent_id].update(params)
        return dict(self.intents[intent_id])

    def confirm_payment_intent(self, settings, intent_id, payment_method):
        self.calls.append(("confirm_payment_intent", intent_id, payment_method))
        self.intents[intent_id].update(status="processing", payment_method=payment_method)
        return dict(self.intents[intent_id])

    def cancel_payment_intent(self, settings, intent_id):
        self.calls.append(("cancel_payment_intent", intent_id))
        intent = self.intents.get(intent_id)
        if intent is None:
            raise NotFound(f"payment intent cancellation: ressource introuvable ({intent_id})")
        if intent["status"] in ("canceled", "succeeded"):
            raise RemoteOperationFailure(f"payment intent cancellation: statut {intent['status']}")
        intent["status"] = "canceled"
        return dict(intent)

    def create_customer(self, settings, **params):
        self.calls.append(("create_customer", params))
        customer = {"id": f"cus_{next(self._ids)}", "object": "customer", **params}
        self.customers.append(customer)
        return customer

    def install(self, monkeypatch) -> "FakeStripe":
        for name in (
            "list_products", "retrieve_product", "update_product_metadata", "list_prices",
            "retrieve_price", "create_payment_intent", "retrieve_payment_intent",
            "update_payment_intent", "confirm_payment_intent", "cancel_payment_intent",
            "create_customer",
        ):
            monkeypatch.setattr(stripe_client, name, getattr(self, name), raising=True)
        return self


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environment="test",
        stripe_secret_key="sk_test_dummy",
        payment_methods=("card", "au_becs_debit", "sepa_debit"),
        webhook_allow_unsigned=True,
        disable_rate_limit=True,
    )


@pytest.fixture
def fake_stripe(monkeypatch) -> FakeStripe:
    """Neutralise tout appel réseau Stripe: les services passent par le module patché."""
    return FakeStripe().install(monkeypatch)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app, fake_stripe) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c
