"""
ASGI entrypoint: expose `app` pour les process managers / déploiements.

- En production, un process manager (ex: gunicorn -k uvicorn.workers.UvicornWorker)
  importe `bodega.asgi:app`.
- Lancement local: `python -m bodega` (voir bodega/__main__.py).
"""

from bodega.app import app
