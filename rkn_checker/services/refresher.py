# rkn_checker/services/refresher.py
import os
import threading
import time
from typing import Callable

from rkn_checker.core.dump_loader import load_dump
from rkn_checker.core.exceptions import DumpError, FetchError
from rkn_checker.core.fetcher import DumpFetcher
from rkn_checker.core.paths import CURRENT_DUMP, FRESH_DUMP, dump_path
from rkn_checker.core.snapshot import SnapshotStore
from rkn_checker.utils.logger import get_logger

logger = get_logger(__name__)


class DumpRefresher:
    """
    Keeps the SnapshotStore fed with the latest dump.

    initial_load() blocks until the first snapshot is installed: downloads
    are retried forever, but a dump that cannot be read is fatal.
    After that, start() runs refresh_once() every `interval` seconds on a
    daemon thread; a failed cycle is logged and the old snapshot stays.
    """

    def __init__(
        self,
        store: SnapshotStore,
        fetcher: DumpFetcher,
        dump_dir: str,
        retry_interval: float,
        interval: float,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.store = store
        self.fetcher = fetcher
        self.current_path = dump_path(dump_dir, CURRENT_DUMP)
        self.fresh_path = dump_path(dump_dir, FRESH_DUMP)
        self.retry_interval = retry_interval
        self.interval = interval
        self._sleep = sleep
        self._thread = None

    def initial_load(self) -> None:
        while True:
            try:
                self.fetcher.fetch(self.current_path)
                break
            except FetchError as e:
                logger.warning(f"{e.message}, retry after {self.retry_interval}s")
                self._sleep(self.retry_interval)

        # DumpReadError propagates: nothing to serve without a first snapshot
        self.store.install(load_dump(self.current_path))

    def refresh_once(self) -> bool:
        logger.info("updating db")
        try:
            self.fetcher.fetch(self.fresh_path)
            tree = load_dump(self.fresh_path)
        except DumpError as e:
            logger.error(f"db update skipped: {e.message}")
            return False

        self.store.install(tree)
        try:
            os.replace(self.fresh_path, self.current_path)
        except OSError as e:
            logger.error(f"cannot move {self.fresh_path} to {self.current_path}: {e}")
        logger.info("db updated")
        return True

    def run_forever(self) -> None:
        while True:
            self._sleep(self.interval)
            try:
                self.refresh_once()
            except Exception:
                logger.exception("db update crashed, keeping current snapshot")

    def start(self) -> threading.Thread:
        if self._thread is None:
            self._thread = threading.Thread(target=self.run_forever, name="dump-refresher", daemon=True)
            self._thread.start()
        return self._thread
