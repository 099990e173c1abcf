from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

router = APIRouter()


@router.get("/_liveness", response_class=PlainTextResponse)
def liveness():
    return "OK"


@router.get("/_readiness", response_class=PlainTextResponse)
def readiness():
    # The server only starts listening after the first snapshot is installed
    return "OK"
