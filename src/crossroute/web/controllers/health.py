"""Health check endpoints."""

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/health")
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "crossroute"}


@router.get("/health/detailed")
async def detailed_health(request: Request):
    """Health with provider configuration (secrets redacted)."""
    service = request.app.state.quote_service
    return {
        "status": "healthy",
        "service": "crossroute",
        "providers": [provider.type.value for provider in service.manager.providers],
        "config": service.ctx.settings.get_safe_dict(),
    }
