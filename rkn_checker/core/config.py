# rkn_checker/core/config.py
from typing import Tuple

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from rkn_checker import __version__

DEFAULT_DUMP_URL = "https://github.com/zapret-info/z-i/raw/master/dump.csv"


class Settings(BaseSettings):
    app_name: str = "rkn-checker"
    app_version: str = __version__

    listen_address: str = ":8020"
    dump_url: str = DEFAULT_DUMP_URL
    dump_dir: str = "/db"
    dump_download_timeout: int = Field(30, gt=0, description="Dump download timeout (sec)")
    dump_download_retry: int = Field(30, ge=0, description="Dump download retry interval (sec)")
    dump_download_interval: int = Field(30, gt=0, description="Dump download interval (min)")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def refresh_period(self) -> int:
        """Refresh period in seconds."""
        return self.dump_download_interval * 60

    def bind(self) -> Tuple[str, int]:
        """Split LISTEN_ADDRESS ('host:port', ':port') into uvicorn's host and port."""
        host, sep, port = self.listen_address.rpartition(":")
        if not sep or not port.isdigit():
            raise ValueError(f"invalid listen address: {self.listen_address!r}")
        host = host.strip("[]") or "0.0.0.0"
        return host, int(port)
