"""Utilitaires transverses (dépendances FastAPI, rate limiting)."""
