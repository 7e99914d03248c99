from fastapi import APIRouter

from ghost_jobs.api.v1 import analyze
from ghost_jobs.api.v1.routes import router as v1_router


api_router = APIRouter()
api_router.include_router(v1_router, prefix="/api/v1")
# Unversioned paths kept for existing clients.
api_router.include_router(analyze.router, prefix="/api", tags=["analyze"])


@api_router.get("/api/health")
def legacy_health() -> dict[str, bool]:
    return {"ok": True}


__all__ = ["api_router"]
