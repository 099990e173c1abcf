from fastapi import APIRouter

from rkn_checker.api.endpoints import health
from rkn_checker.api.endpoints import check

router = APIRouter()
router.include_router(health.router, tags=["_meta"])
router.include_router(check.router, prefix="/v1/rkn", tags=["rkn"])
