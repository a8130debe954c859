"""
Exceptions métier du backend.

Hiérarchie unique enracinée sur BodegaError: chaque erreur porte son code HTTP,
un code machine stable et des détails sérialisables. Les handlers FastAPI
(bodega.app_setup.exceptions) les rendent telles quelles en JSON.
"""
from typing import Any, Dict, Optional


class BodegaError(Exception):
    """
    Erreur de base.

    Attributes:
        message: message lisible destiné au client
        status_code: code HTTP à renvoyer
        code: identifiant machine stable
        details: contexte additionnel (sérialisable)
    """

    status_code = 500
    code = "internal_error"

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"message": self.message, "code": self.code}
        if self.details:
            payload["meta"] = self.details
        return payload


class RemoteLookupFailure(BodegaError):
    """Lecture Stripe (produit, prix, intent) en échec."""

    status_code = 502
    code = "remote_lookup_failed"


class NotFound(RemoteLookupFailure):
    status_code = 404
    code = "not_found"


class RemoteOperationFailure(BodegaError):
    """Écriture Stripe (création, mise à jour, confirmation, annulation) en échec."""

    status_code = 502
    code = "remote_operation_failed"


class ValidationFailure(BodegaError):
    """
    Panier refusé pour une raison imputable au client.
    Nomme toujours le vin concerné pour que l'UI affiche un message exploitable.
    """

    status_code = 406
    code = "validation_failed"

    def __init__(
        self,
        message: str,
        product_id: Optional[str] = None,
        product_name: Optional[str] = None,
        stock: Optional[int] = None,
        requested: Optional[int] = None,
    ) -> None:
        self.product_id = product_id
        self.product_name = product_name
        self.stock = stock
        self.requested = requested
        details: Dict[str, Any] = {}
        if product_id:
            wine: Dict[str, Any] = {"id": product_id, "name": product_name}
            if stock is not None:
                wine["stock"] = str(stock)
            if requested is not None:
                wine["requested"] = requested
            details = {"wines": [wine]}
        super().__init__(message, details=details)


class NoBottlesSelected(ValidationFailure):
    code = "no_bottles_selected"


class InsufficientStock(ValidationFailure):
    code = "insufficient_stock"


class InvalidStockMetadata(ValidationFailure):
    code = "invalid_stock_metadata"


class UnknownShippingOption(ValidationFailure):
    status_code = 400
    code = "unknown_shipping_option"


class StatusConflict(BodegaError):
    """Confirmation demandée sur un intent qui n'attend plus de moyen de paiement."""

    status_code = 409
    code = "status_conflict"


class AuthenticationFailure(BodegaError):
    """Signature webhook absente ou invalide."""

    status_code = 401
    code = "unauthorized"


class MalformedInput(BodegaError):
    status_code = 400
    code = "malformed_input"


class LedgerUnavailable(BodegaError):
    """Registre des événements webhook (Redis) injoignable."""

    status_code = 503
    code = "ledger_unavailable"
