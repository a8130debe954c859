"""
Décodage des événements Stripe en un type fermé.

WebhookEvent = PaymentIntentEvent | SourceEvent | UnrecognizedEvent

Le type est choisi d'après data.object.object; tout autre genre d'objet donne
un UnrecognizedEvent explicite (jamais de passage silencieux).
"""
from typing import Any, Dict, Literal, Union

from pydantic import BaseModel

from bodega.errors import MalformedInput

PAYMENT_INTENT = "payment_intent"
SOURCE = "source"


class _BaseEvent(BaseModel):
    id: str
    type: str


class PaymentIntentEvent(_BaseEvent):
    kind: Literal["payment_intent"] = PAYMENT_INTENT
    intent: Dict[str, Any]


class SourceEvent(_BaseEvent):
    kind: Literal["source"] = SOURCE
    source: Dict[str, Any]


class UnrecognizedEvent(_BaseEvent):
    kind: str
    data_object: Dict[str, Any] = {}


WebhookEvent = Union[PaymentIntentEvent, SourceEvent, UnrecognizedEvent]


def decode_event(payload: Dict[str, Any]) -> WebhookEvent:
    """
    Construit la variante correspondant à payload.data.object.object.
    - MalformedInput si id, type ou data.object manquent.
    """
    if not isinstance(payload, dict):
        raise MalformedInput("Événement webhook invalide: objet JSON attendu")
    event_id = payload.get("id")
    event_type = payload.get("type")
    data = payload.get("data")
    data_object = data.get("object") if isinstance(data, dict) else None
    if not event_id or not event_type or not isinstance(data_object, dict):
        raise MalformedInput("Événement webhook invalide: id, type ou data.object manquant")

    kind = str(data_object.get("object") or "")
    if kind == PAYMENT_INTENT:
        return PaymentIntentEvent(id=event_id, type=event_type, intent=data_object)
    if kind == SOURCE:
        return SourceEvent(id=event_id, type=event_type, source=data_object)
    return UnrecognizedEvent(id=event_id, type=event_type, kind=kind, data_object=data_object)
