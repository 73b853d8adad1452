"""
Health routes
"""

from fastapi import APIRouter, Request

from ..config import API_VERSION

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request):
    """Report whether remote features are configured and the cache is reachable."""
    container = request.app.state.container
    checks = {
        "analysis_configured": container.orchestrator.analyzer is not None,
        "video_configured": container.orchestrator.video_client is not None,
    }
    try:
        stats = await container.cache.stats()
        checks["cache"] = {"available": True, "count": stats.count}
    except Exception as e:
        checks["cache"] = {"available": False, "error": str(e)}

    status = "healthy" if checks["cache"]["available"] else "degraded"
    return {"status": status, "version": API_VERSION, "checks": checks}
