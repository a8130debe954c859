# module bodega.webhooks.views
"""Webhook Stripe du panier.
- 401 si la signature est invalide (ou absente sans mode non signé explicite).
- 400 si le payload n'est pas un événement lisible.
- Sinon 200 systématique: un événement non reconnu est tracé côté serveur, et
  une erreur de traitement est renvoyée dans le corps sans changer le statut
  (évite les tempêtes de relivraison Stripe).
"""
import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from bodega.config import Settings
from bodega.errors import BodegaError
from bodega.utils.dependencies import get_event_ledger, get_settings
from bodega.webhooks import service as webhooks_service
from bodega.webhooks.events import decode_event
from bodega.webhooks.signature import read_event

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/webhook", tags=["Webhooks"])


@router.post("/shopping-cart", include_in_schema=False)
async def shopping_cart_webhook(
    request: Request,
    settings: Settings = Depends(get_settings),
    ledger=Depends(get_event_ledger),
):
    payload = await request.body()
    signature = request.headers.get("stripe-signature")
    event = decode_event(read_event(settings, payload, signature))

    try:
        handled = await run_in_threadpool(webhooks_service.handle, settings, ledger, event)
    except BodegaError as e:
        logger.exception("Erreur webhook id=%s type=%s", event.id, event.type)
        return JSONResponse(status_code=200, content=e.to_dict())
    except Exception:
        logger.exception("Erreur inattendue webhook id=%s type=%s", event.id, event.type)
        return JSONResponse(status_code=200, content=BodegaError("Erreur interne du webhook").to_dict())

    if not handled:
        logger.info("Webhook reçu et non traité: %s (%s)", event.type, event.id)
    return Response(status_code=200)
