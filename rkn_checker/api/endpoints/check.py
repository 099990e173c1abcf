from typing import Dict

from fastapi import APIRouter, Depends, Request
from starlette.concurrency import run_in_threadpool

from rkn_checker.api.deps import get_check_service
from rkn_checker.services.checker import CheckService, decode_addresses

router = APIRouter()

_REQUEST_BODY = {
    "required": True,
    "content": {
        "application/json": {
            "schema": {"type": "array", "items": {"type": "string"}, "example": ["1.2.3.4"]},
        },
    },
}


# --------- POST /v1/rkn/check ----------
# The body is decoded as JSON whatever Content-Type says. The lookup runs in
# the threadpool, so a request waiting on the snapshot lock never stalls the
# event loop.
@router.post("/check", response_model=Dict[str, bool], openapi_extra={"requestBody": _REQUEST_BODY})
async def check_ips(
    request: Request,
    svc: CheckService = Depends(get_check_service),
):
    ips = decode_addresses(await request.body())
    return await run_in_threadpool(svc.check, ips)
