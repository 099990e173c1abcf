# rkn_checker/core/fetcher.py
import os
import time
from typing import Optional

import requests

from rkn_checker import __version__
from rkn_checker.core.exceptions import FetchError
from rkn_checker.core.paths import ensure_dir
from rkn_checker.utils.logger import get_logger

logger = get_logger(__name__)

CHUNK_SIZE = 64 * 1024


class DumpFetcher:
    """
    Downloads the registry dump to a local file.

    A single attempt per fetch() call; retrying is the caller's business.
    `timeout` bounds the whole exchange, not only each socket read.
    The destination is a scratch path: whatever was there is removed first
    and a failed attempt removes what it wrote.
    """

    def __init__(self, url: str, timeout: float, session: Optional[requests.Session] = None):
        self.url = url
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": f"rkn-checker/{__version__}"})

    def fetch(self, path: str) -> None:
        logger.info(f"downloading dump from {self.url} to {path}")
        deadline = time.monotonic() + self.timeout
        try:
            resp = self.session.get(self.url, stream=True, timeout=(self.timeout, self.timeout))
        except requests.RequestException as e:
            raise FetchError(f"GET {self.url} failed: {e}") from e

        with resp:
            try:
                self._remove_existing(path)
                if resp.status_code != 200:
                    raise FetchError(f"GET {self.url}: {resp.status_code} {resp.reason}")
                self._write(path, resp, deadline)
            except requests.RequestException as e:
                raise FetchError(f"GET {self.url} interrupted: {e}") from e
            except OSError as e:
                raise FetchError(f"cannot write dump {path}: {e}") from e

        logger.info("dump downloaded")

    def _remove_existing(self, path: str) -> None:
        if os.path.exists(path):
            logger.info(f"file {path} exists, removing it")
            os.remove(path)

    def _write(self, path: str, resp: requests.Response, deadline: float) -> None:
        ensure_dir(os.path.dirname(path) or ".")

        try:
            with open(path, "xb") as f:
                for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
                    if time.monotonic() > deadline:
                        raise FetchError(f"GET {self.url}: download exceeded {self.timeout}s")
        except BaseException:
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            raise
