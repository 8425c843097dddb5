"""
lunch_governance/routers - API routers.

All routers use prefix="/api" so routes resolve to:
  /api/pipeline/run
"""

from lunch_governance.routers.pipeline import router as pipeline_router

__all__ = ["pipeline_router"]
