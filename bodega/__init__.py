"""Bodega: backend de la boutique de vins (catalogue, paiements et webhooks Stripe)."""

__version__ = "1.0.0"
