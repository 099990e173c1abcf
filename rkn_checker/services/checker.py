# rkn_checker/services/checker.py
from typing import Dict, List

from pydantic import TypeAdapter, ValidationError as PydanticValidationError

from rkn_checker.core.exceptions import BadRequest
from rkn_checker.core.snapshot import SnapshotStore

_ADDRESS_LIST = TypeAdapter(List[str])


def decode_addresses(body: bytes) -> List[str]:
    """
    Decode a check payload: a JSON array of strings.
    The Content-Type header is not consulted; clients send the array as
    application/json, text/plain or form-encoded alike.
    """
    try:
        return _ADDRESS_LIST.validate_json(body)
    except PydanticValidationError as e:
        errors = e.errors()
        raise BadRequest(errors[0]["msg"] if errors else "invalid request body") from e


class CheckService:
    def __init__(self, store: SnapshotStore):
        self.store = store

    def check(self, addresses: List[str]) -> Dict[str, bool]:
        if not addresses:
            raise BadRequest("empty ip list")
        return self.store.check_many(addresses)
