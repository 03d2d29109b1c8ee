from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Any, Iterator, Optional

import typer
from fastapi.encoders import jsonable_encoder
from typing_extensions import Annotated

from .container import Container
from ..core.domain.errors import TrustApiError


app = typer.Typer(add_completion=False, help="Trusted content API")


class LogLevel(str, Enum):
    OFF = "OFF"
    CRITICAL = "CRITICAL"
    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"
    DEBUG = "DEBUG"


@contextmanager
def provide_container() -> Iterator[Container]:
    container = Container()
    container.init_resources()
    try:
        yield container
    finally:
        container.shutdown_resources()


def _print_json(obj: Any) -> None:
    typer.echo(json.dumps(jsonable_encoder(obj), ensure_ascii=False, indent=2))


@contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except TrustApiError as e:
        typer.echo(f"Error {e.status_code}: {e.message}", err=True)
        raise typer.Exit(code=1)


@app.callback()
def main(
    log_level: Annotated[
        Optional[LogLevel],
        typer.Option("--log-level", help="Set log level (OFF, CRITICAL, ERROR, WARNING, INFO, DEBUG). Default: OFF"),
    ] = None,
) -> None:
    """Configure the package logger when a level is requested."""
    if log_level in (None, LogLevel.OFF):
        return

    level = logging.getLevelName(log_level.value)
    package_name = __package__.split(".", 1)[0] if __package__ else "trust_api"
    logger = logging.getLogger(package_name)

    has_stream = any(isinstance(h, logging.StreamHandler) for h in logger.handlers)
    if not has_stream:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(handler)

    logger.propagate = False
    logger.setLevel(level)


@app.command(help="Run the HTTP server.")
def serve(
    bind: Optional[str] = typer.Option(None, help="Bind address (default: TRUST_API_BIND or localhost)"),
    port: Optional[int] = typer.Option(None, help="Port (default: TRUST_API_PORT or 8081)"),
) -> None:
    import uvicorn

    from .web import create_app

    with provide_container() as container:
        host = bind or container.config.bind()
        listen_port = port or container.config.port()
        uvicorn.run(create_app(container), host=host, port=listen_port)


@app.command(help="Look up one package: trust verdict, vulnerabilities, related versions, SBOM link.")
def package(purl: str = typer.Argument(..., help="Package URL, e.g. pkg:npm/lodash@4.17.21")) -> None:
    with provide_container() as container, _reported_errors():
        _print_json(container.get_package_uc().execute(purl))


@app.command(help="List related versions. With several purls only the last one's versions are printed.")
def versions(purls: list[str] = typer.Argument(..., metavar="PURL")) -> None:
    with provide_container() as container, _reported_errors():
        _print_json(container.query_versions_uc().execute(purls))


@app.command(help="Print the whole trusted inventory known to the graph.")
def trusted() -> None:
    with provide_container() as container, _reported_errors():
        _print_json(container.list_trusted_uc().execute())


@app.command(help="Print the SBOM document registered for a package.")
def sbom(purl: str = typer.Argument(..., help="Package URL")) -> None:
    with provide_container() as container, _reported_errors():
        _print_json(container.fetch_sbom_uc().execute(purl))


@app.command(help="Ingest CycloneDX/SPDX JSON documents from a directory into the local SBOM registry.")
def ingest(directory: Path = typer.Argument(..., exists=True, file_okay=False, help="Directory of SBOM files")) -> None:
    with provide_container() as container:
        count = container.sbom_registry().ingest_dir(directory)
        typer.echo(f"Ingested {count} SBOM documents")


if __name__ == "__main__":  # pragma: no cover
    app()
