# rkn_checker/cli.py
from typing import Optional

import typer
import uvicorn

from rkn_checker import __version__
from rkn_checker.core.config import Settings
from rkn_checker.main import create_app
from rkn_checker.utils.logger import get_logger, setup_logging

app = typer.Typer(help="Check IP addresses for blocking by RKN", add_completion=False)

log = get_logger(__name__)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


def _overrides(**values) -> dict:
    return {k: v for k, v in values.items() if v is not None}


@app.command()
def serve(
    listen_addr: Optional[str] = typer.Option(
        None, "--listen-addr", help="HTTP Server listen address [env LISTEN_ADDRESS, default :8020]"),
    dump_url: Optional[str] = typer.Option(
        None, "--dump-url", help="RKN db url [env DUMP_URL]"),
    dump_dir: Optional[str] = typer.Option(
        None, "--dump-dir", help="Directory to place db [env DUMP_DIR, default /db]"),
    dump_download_timeout: Optional[int] = typer.Option(
        None, "--dump-download-timeout", help="Dump download timeout (sec) [env DUMP_DOWNLOAD_TIMEOUT, default 30]"),
    dump_download_retry: Optional[int] = typer.Option(
        None, "--dump-download-retry", help="Dump download retry interval (sec) [env DUMP_DOWNLOAD_RETRY, default 30]"),
    dump_download_interval: Optional[int] = typer.Option(
        None, "--dump-download-interval", help="Dump download interval (min) [env DUMP_DOWNLOAD_INTERVAL, default 30]"),
    version: Optional[bool] = typer.Option(
        None, "--version", callback=_version_callback, is_eager=True, help="Print the version and exit"),
):
    """Serve POST /v1/rkn/check backed by a periodically refreshed dump."""
    setup_logging()
    settings = Settings(**_overrides(
        listen_address=listen_addr,
        dump_url=dump_url,
        dump_dir=dump_dir,
        dump_download_timeout=dump_download_timeout,
        dump_download_retry=dump_download_retry,
        dump_download_interval=dump_download_interval,
    ))
    try:
        host, port = settings.bind()
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--listen-addr") from e

    api = create_app(settings)
    log.info(f"listening on {settings.listen_address}")
    uvicorn.run(api, host=host, port=port, log_config=None)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
