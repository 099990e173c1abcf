import os
from typing import List, Optional, Union

import pytest

from rkn_checker.core.dump_loader import DUMP_ENCODING, parse_dump
from rkn_checker.core.exceptions import FetchError
from rkn_checker.core.snapshot import SnapshotStore

SAMPLE_DUMP = (
    "Updated: 2024-05-01 12:00:00 +0000\n"
    "1.2.3.0/24|5.6.7.8;reason\n"
    "10.10.0.0/16 | 10.20.30.40;casino.example;http://casino.example/;Генпрокуратура;27-31-2018/Ид2971-18;2018-04-16\n"
    "2001:db8::/32;v6.example;;Роскомнадзор;1;2020-01-01\n"
)


class ScriptedFetcher:
    """
    Stand-in for DumpFetcher.

    Each fetch() consumes one outcome: an exception instance is raised,
    a string is written to the destination as the dump body, None
    "succeeds" without writing anything.
    """

    def __init__(self, outcomes: List[Union[Exception, str, None]]):
        self.outcomes = list(outcomes)
        self.calls: List[str] = []

    def fetch(self, path: str) -> None:
        self.calls.append(path)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        if os.path.exists(path):
            os.remove(path)
        if outcome is not None:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding=DUMP_ENCODING) as f:
                f.write(outcome)


class RecordingSleep:
    def __init__(self):
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def fetch_error(msg: Optional[str] = None) -> FetchError:
    return FetchError(msg or "GET https://dump.example/dump.csv: 503 Service Unavailable")


@pytest.fixture
def sample_tree():
    return parse_dump(SAMPLE_DUMP.splitlines())


@pytest.fixture
def store(sample_tree):
    return SnapshotStore(sample_tree)


@pytest.fixture
def dump_dir(tmp_path):
    return str(tmp_path / "db")
