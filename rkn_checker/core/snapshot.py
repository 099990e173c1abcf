# rkn_checker/core/snapshot.py
import threading
from typing import Dict, List, Optional

from rkn_checker.core.ip_tree import BLOCKED, IPTree


class SnapshotStore:
    """
    Guarded reference to the IPTree currently being served.

    The refresher builds a new tree privately and hands it to install();
    only the pointer swap and the per-request lookup loop run under the lock,
    so a request sees exactly one snapshot for its whole batch and never a
    partially built one.
    """

    def __init__(self, tree: Optional[IPTree] = None):
        self._lock = threading.Lock()
        self._tree = tree

    @property
    def ready(self) -> bool:
        with self._lock:
            return self._tree is not None

    def install(self, tree: IPTree) -> Optional[IPTree]:
        """Publish `tree` and return the snapshot it replaces."""
        with self._lock:
            previous, self._tree = self._tree, tree
        return previous

    def check_many(self, addresses: List[str]) -> Dict[str, bool]:
        """
        Look every address up against the same snapshot.
        MalformedAddress from any element propagates and the batch is lost.
        """
        with self._lock:
            tree = self._tree
            if tree is None:
                raise RuntimeError("no snapshot installed")
            return {ip: tree.lookup(ip) == BLOCKED for ip in addresses}
