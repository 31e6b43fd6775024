from fastapi import APIRouter, Depends

from nordic_analyzer.common.dependencies import SessionRegistry, get_registry
from nordic_analyzer.config.settings import settings

router = APIRouter(tags=["Health"])


@router.get("/health")
def health_check(registry: SessionRegistry = Depends(get_registry)):
    return {
        "status": "ok",
        "env": settings.ENV,
        "sessions": len(registry),
        "max_sessions": registry.max_sessions,
    }


ROUTERS = [router]
