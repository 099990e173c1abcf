# rkn_checker/core/dump_loader.py
"""
Parser for the registry dump.

Dump format (one record per line, ';'-separated):
    1.2.3.0/24 | 5.6.7.8;domain.example;http://url;Authority;N 123;2017-01-01

Only field 0 is used: a '|'-separated list of addresses and CIDR blocks,
every one of which is inserted as BLOCKED. The feed is third-party and
occasionally damaged, so bad lines and bad entries are skipped rather than
failing the whole load.
"""
from typing import Iterable

from rkn_checker.core.exceptions import DumpReadError, MalformedAddress
from rkn_checker.core.ip_tree import BLOCKED, IPTree
from rkn_checker.utils.logger import get_logger, log_execution_time

logger = get_logger(__name__)

# The registry publishes the dump in windows-1251
DUMP_ENCODING = "cp1251"

FIELD_SEP = ";"
ADDRESS_SEP = "|"


def parse_dump(lines: Iterable[str]) -> IPTree:
    tree = IPTree()
    for line in lines:
        fields = line.split(FIELD_SEP)
        if len(fields) < 2:
            continue
        for item in fields[0].split(ADDRESS_SEP):
            item = item.strip()
            if not item:
                continue
            try:
                tree.insert(item, BLOCKED)
            except MalformedAddress:
                continue
    return tree


@log_execution_time(level="INFO")
def load_dump(path: str) -> IPTree:
    """
    Build a fresh IPTree from the dump file at `path`.

    Raises:
        DumpReadError: the file cannot be opened or read
    """
    try:
        with open(path, "r", encoding=DUMP_ENCODING, errors="replace") as f:
            tree = parse_dump(f)
    except OSError as e:
        raise DumpReadError(f"cannot read dump {path}: {e}") from e

    logger.info(f"dump {path} loaded: {len(tree)} prefixes")
    return tree
