"""
Factory d'application pour les entrypoints (bodega.app, bodega.asgi) et les tests.
Ordonne les étapes d'initialisation de manière lisible et testable.
"""
from typing import Optional

from fastapi import FastAPI

from bodega import __version__
from bodega.config import Settings, load_settings
from .exceptions import register_exception_handlers
from .lifespan import lifespan
from .middlewares import register_basic_middlewares, register_security_middleware
from .routers import register_routers


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'app FastAPI:
      1) Settings: fourni (tests) ou chargé depuis l'environnement, une seule fois.
      2) middlewares de base (CORS, TrustedHost) puis en-têtes de sécurité.
      3) gestionnaires d'exceptions métier.
      4) tous les routers (catalogue, paiements, clients, webhooks, health).
    """
    settings = settings or load_settings()
    app = FastAPI(title="Bodega API", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    register_basic_middlewares(app, settings)
    register_security_middleware(app)
    register_exception_handlers(app)
    register_routers(app)
    return app
