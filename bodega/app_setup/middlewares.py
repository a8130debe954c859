"""
Middlewares transverses de l'application.
- register_basic_middlewares: CORS (grand ouvert en développement) et TrustedHost.
- register_security_middleware: en-têtes de sécurité sur toutes les réponses.
"""
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.trustedhost import TrustedHostMiddleware

from bodega.config import Settings


def register_basic_middlewares(app: FastAPI, settings: Settings) -> None:
    """
    - CORSMiddleware: toutes origines en développement, CORS_ORIGINS sinon.
    - TrustedHostMiddleware: limite les hôtes acceptés (défense host header).
    """
    origins = ["*"] if settings.is_development else list(settings.cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    allowed_hosts = list(settings.allowed_hosts)
    if "*" in origins:
        allowed_hosts.append("*")
    app.add_middleware(TrustedHostMiddleware, allowed_hosts=allowed_hosts)


def register_security_middleware(app: FastAPI) -> None:
    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer")
        return response
