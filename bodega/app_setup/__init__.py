"""Assemblage de l'application FastAPI (factory, lifespan, middlewares, handlers, routers)."""
