"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

from typing import Any

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from intercom_client import __version__
from intercom_client.core.domain.models import Envelope, RateLimitMeta


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida."""

    title = Text("intercom-client", style="bold cyan")
    subtitle = Text(f"v{__version__} • Intercom REST API", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def build_meta_table(meta: RateLimitMeta) -> Table:
    """Tabla con los contadores de rate-limit de una respuesta."""

    table = Table(title="Rate limit")
    table.add_column("Counter", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    for name, value in meta.model_dump().items():
        table.add_row(name, "-" if value is None else str(value))
    return table


def print_envelope(console: Console, envelope: Envelope) -> None:
    """Cuerpo (JSON o texto crudo) seguido de la metadata."""

    if envelope.is_json:
        console.print_json(data=envelope.body)
    else:
        console.print(envelope.body or "[dim](empty body)[/dim]")
    console.print(build_meta_table(envelope.meta))


def print_items(console: Console, items: list[Any]) -> None:
    console.print_json(data=items)
    console.print(f"[dim]{len(items)} item(s)[/dim]")
