from typing import Any, Dict
from fastapi import Request, Response


def _client_key(request: Request) -> str:
    # Pas de session utilisateur: la clé est l'IP + le chemin
    ip = request.client.host if request.client else "local"
    return f"ip:{ip}:{request.url.path}"


def optional_rate_limit(times: int, seconds: int):
    """
    Dépendance de rate limiting tolérante.
    - Sans Redis initialisé (app.state.rate_limit_enabled False), ne limite rien.
    - Sinon délègue à fastapi-limiter (429 au-delà de `times` requêtes / `seconds`).
    """
    async def _dep(request: Request, response: Response):
        if getattr(request.app.state, "rate_limit_enabled", None) is not True:
            return

        from fastapi_limiter.depends import RateLimiter

        async def _identifier(req: Request) -> str:
            return _client_key(req)

        return await RateLimiter(times=times, seconds=seconds, identifier=_identifier)(request, response)
    return _dep


def rate_limit_health_info(request: Request) -> Dict[str, Any]:
    enabled = getattr(request.app.state, "rate_limit_enabled", None)

    limiter_ready = False
    try:
        from fastapi_limiter import FastAPILimiter
        limiter_ready = getattr(FastAPILimiter, "redis", None) is not None
    except ImportError:
        limiter_ready = False

    return {
        "enabled": bool(enabled) if enabled is not None else None,
        "ready": limiter_ready,
        "backend": "redis" if limiter_ready else None,
    }
