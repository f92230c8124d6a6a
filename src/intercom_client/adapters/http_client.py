"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeout, cabeceras y autenticación Basic para todas las llamadas.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from intercom_client import __version__
from intercom_client.core.config import ClientConfig


def build_async_client(
    config: ClientConfig,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
    extra_headers: dict[str, str] | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` a partir de la configuración del cliente.

    Por qué un builder:
    - Centraliza timeout/headers/auth para que todas las llamadas se comporten igual.
    - Cada llamada abre su propio cliente: el handle de `Intercom` no guarda
      estado mutable entre peticiones.
    """

    headers: dict[str, str] = {
        "User-Agent": f"intercom-client-python/{__version__}",
        "Accept": "application/json",
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.timeout_seconds),
        auth=httpx.BasicAuth(config.identity, config.secret or ""),
        headers=headers,
        transport=transport,
    )
