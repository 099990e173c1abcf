# rkn_checker/api/deps.py
from fastapi import Request

from rkn_checker.core.snapshot import SnapshotStore
from rkn_checker.services.checker import CheckService


def get_store(request: Request) -> SnapshotStore:
    return request.app.state.store


def get_check_service(request: Request) -> CheckService:
    return CheckService(get_store(request))
