"""CLI principal.

Comandos:
- `request METHOD PATH -p clave=valor`: una llamada autenticada.
- `pages PATH`: todos los elementos de un recurso paginado.
- `doctor run`: diagnóstico de configuración y conectividad.

La configuración se lee de `INTERCOM_*` (ver `ClientSettings`).
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from intercom_client.cli import doctor
from intercom_client.cli.ui_components import print_envelope, print_items
from intercom_client.core.errors import IntercomError
from intercom_client.core.services.client import Intercom

app = typer.Typer(no_args_is_help=True, help="Command line access to the Intercom API.")
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_client() -> Intercom:
    return Intercom.from_env()


def parse_params(values: list[str] | None) -> dict[str, Any]:
    """Convierte `clave=valor` en un dict. Los valores JSON se decodifican."""

    params: dict[str, Any] = {}
    for raw in values or []:
        if "=" not in raw:
            raise typer.BadParameter(f"expected key=value, got {raw!r}")
        key, value = raw.split("=", 1)
        try:
            params[key.strip()] = json.loads(value)
        except ValueError:
            params[key.strip()] = value
    return params


def _fail(exc: IntercomError) -> typer.Exit:
    _console.print(f"[red]Error:[/red] {exc}")
    return typer.Exit(code=1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log HTTP traffic."),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.command()
def request(
    method: str = typer.Argument(..., help="HTTP verb (GET, POST, PUT, DELETE)."),
    path: str = typer.Argument(..., help="Resource path, e.g. users or companies/123."),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="key=value (repeatable)."),
) -> None:
    """Send one authenticated request and print the envelope."""

    params = parse_params(param)

    async def _run() -> Any:
        return await build_client().request(method, path, params)

    try:
        envelope = asyncio.run(_run())
    except IntercomError as exc:
        raise _fail(exc) from exc
    print_envelope(_console, envelope)


@app.command()
def pages(
    path: str = typer.Argument(..., help="Paginated resource, e.g. companies."),
    param: Optional[List[str]] = typer.Option(None, "--param", "-p", help="key=value (repeatable)."),
    key: Optional[str] = typer.Option(None, "--key", help="List key in each page (defaults to PATH)."),
) -> None:
    """Follow pages.next and print every collected item."""

    params = parse_params(param)

    async def _run() -> list[Any]:
        return await build_client().get_pages(path, params, key=key)

    try:
        items = asyncio.run(_run())
    except IntercomError as exc:
        raise _fail(exc) from exc
    print_items(_console, items)


def run() -> None:
    app()


if __name__ == "__main__":
    run()
