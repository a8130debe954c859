from fastapi import APIRouter, Request

from bodega.utils.rate_limit import rate_limit_health_info

router = APIRouter(prefix="/health", tags=["Health"])


@router.get("")
def health_root(request: Request):
    settings = request.app.state.settings
    return {
        "ok": True,
        "environment": settings.environment,
        "stripe_configured": bool(settings.stripe_secret_key),
        "rate_limit": rate_limit_health_info(request),
    }
