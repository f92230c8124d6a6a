"""Doctor command for configuration diagnostics."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from intercom_client.cli.ui_components import print_banner
from intercom_client.core.config import ClientSettings
from intercom_client.core.errors import IntercomError
from intercom_client.core.services.client import Intercom

app = typer.Typer(no_args_is_help=True, help="Configuration and connectivity checks.")

_console = Console()


async def _check_http(settings: ClientSettings) -> tuple[bool, str]:
    try:
        client = Intercom.from_env(settings)
        envelope = await client.request("GET", "me")
    except IntercomError as exc:
        return False, str(exc)
    remaining = envelope.meta.ratelimit_remaining
    detail = f"HTTP {envelope.status_code}"
    if remaining is not None:
        detail += f" (rate limit remaining: {remaining})"
    return True, detail


@app.command()
def run(
    offline: bool = typer.Option(False, "--offline", help="Skip the connectivity probe."),
) -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = ClientSettings()
    print_banner(_console)

    table = Table(title="intercom-client doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    identity = settings.app_id or settings.personal_access_token
    if identity:
        kind = "App ID" if settings.app_id else "Personal access token"
        table.add_row("Identity", "OK", kind)
    else:
        table.add_row("Identity", "MISSING", "Set INTERCOM_APP_ID or INTERCOM_PERSONAL_ACCESS_TOKEN")
    if settings.api_key:
        table.add_row("API key", "OK", "Sent as Basic auth password")
    else:
        table.add_row("API key", "OPTIONAL", "Empty password will be sent")
    table.add_row("Endpoint", "OK", settings.endpoint)
    table.add_row("Timeout", "OK", f"{settings.timeout_ms:g} ms")

    if identity and not offline:
        ok_http, detail_http = asyncio.run(_check_http(settings))
        table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not identity:
        raise typer.Exit(code=1)
