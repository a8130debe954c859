"""
Registre central des routers.
- Catalogue: /config, /wines, /prices
- Paiements: /payment-intents
- Clients: /customers
- Webhooks: /webhook/shopping-cart
- Health: /health
"""
from fastapi import FastAPI

from bodega.customers import views as customers_views
from bodega.health.router import router as health_router
from bodega.inventory import views as inventory_views
from bodega.payments import views as payments_views
from bodega.webhooks import views as webhooks_views


def register_routers(app: FastAPI) -> None:
    app.include_router(inventory_views.router)
    app.include_router(payments_views.router)
    app.include_router(customers_views.router)
    app.include_router(webhooks_views.router)
    app.include_router(health_router)
