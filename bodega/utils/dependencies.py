"""Dépendances FastAPI partagées par les routers."""
from fastapi import Request

from bodega.config import Settings


def get_settings(request: Request) -> Settings:
    """Settings construit au démarrage (app.state.settings)."""
    return request.app.state.settings


def get_event_ledger(request: Request):
    """Registre des événements webhook créé par le lifespan."""
    return request.app.state.event_ledger
