"""
Gestionnaires d'exceptions.
- BodegaError: JSON {message, code, meta?} avec le code HTTP porté par l'erreur
  (406 pour un panier refusé, 404 ressource Stripe absente, 409 conflit de statut...).
- RequestValidationError: corps mal formé -> 400 malformed_input.
- HTTPException: JSON FastAPI standard {"detail": ...}.
"""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bodega.errors import BodegaError, MalformedInput

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(BodegaError)
    async def bodega_error(request: Request, exc: BodegaError):
        if exc.status_code >= 500:
            logger.error("%s %s -> %s: %s", request.method, request.url.path, exc.code, exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def malformed_body(request: Request, exc: RequestValidationError):
        err = MalformedInput("Corps de requête invalide", details={"errors": jsonable_encoder(exc.errors())})
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})
