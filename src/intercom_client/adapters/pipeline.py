"""Pipeline de peticiones HTTP.

Una llamada lógica (verbo, path, parámetros) se convierte en exactamente un
intercambio HTTP y en un resultado normalizado:

- GET/DELETE: parámetros en la query string.
- POST/PUT/PATCH: parámetros como cuerpo JSON.
- Autenticación Basic con las credenciales del cliente.
- Errores de red -> `TransportError`; cuerpo con `error(s)` -> `ApiError`.
- Cuerpos que no son JSON se devuelven crudos (no es un error).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx

from intercom_client.adapters.http_client import build_async_client
from intercom_client.adapters.query import encode_query
from intercom_client.core.config import ClientConfig
from intercom_client.core.domain.models import Envelope, RateLimitMeta
from intercom_client.core.errors import ApiError, TransportError

logger = logging.getLogger(__name__)

PROVIDER = "Intercom"

READ_METHODS = frozenset({"GET", "DELETE"})


@dataclass(frozen=True)
class RequestDescriptor:
    """Petición ya resuelta. Se construye por llamada y no se guarda."""

    method: str
    url: str
    params: list[tuple[str, str]] = field(default_factory=list)
    body: Any | None = None
    headers: dict[str, str] = field(default_factory=dict)
    auth: tuple[str, str] = ("", "")

    @property
    def has_body(self) -> bool:
        return self.method not in READ_METHODS


def resolve_url(endpoint: str, path: str) -> str:
    """Usa `path` tal cual si ya empieza por el endpoint; si no, lo concatena."""

    if path.startswith(endpoint):
        return path
    return endpoint + path.lstrip("/")


def build_request(
    config: ClientConfig,
    method: str,
    path: str,
    params: Mapping[str, Any] | None = None,
) -> RequestDescriptor:
    verb = method.upper()
    url = resolve_url(config.endpoint, path)
    auth = (config.identity, config.secret or "")
    if verb in READ_METHODS:
        return RequestDescriptor(
            method=verb,
            url=url,
            params=encode_query(params),
            headers={"Accept": "application/json"},
            auth=auth,
        )
    return RequestDescriptor(
        method=verb,
        url=url,
        body=dict(params or {}),
        headers={"Accept": "application/json", "Content-Type": "application/json"},
        auth=auth,
    )


def _error_code(error: Any) -> str:
    if isinstance(error, Mapping):
        code = error.get("code") or error.get("type")
        if code is not None:
            return str(code)
    return str(error)


def error_from_body(parsed: Any, status_code: int | None = None) -> ApiError | None:
    """Devuelve un `ApiError` si el cuerpo trae `error` o `errors`."""

    if not isinstance(parsed, Mapping):
        return None
    # Basta con que la clave exista y no sea null (`[]` y `{}` también fallan).
    error = parsed.get("error")
    errors = parsed.get("errors")
    if error is None and errors is None:
        return None

    if errors is None:
        errors = [error]
    elif not isinstance(errors, list):
        errors = [errors]
    elif not errors and error is not None:
        errors = [error]

    codes = ", ".join(f'"{_error_code(e)}"' for e in errors) or '""'
    return ApiError(f"{codes} error(s) from {PROVIDER}", errors, status_code=status_code)


def parse_response(response: httpx.Response) -> Envelope:
    """Normaliza una respuesta ya recibida (sin errores de transporte)."""

    text = response.text
    body: Any = text
    is_json = False
    if text:
        logger.debug("Received response %s", text)
        try:
            body = json.loads(text)
            is_json = True
        except ValueError:
            # 204 u otras respuestas sin JSON: se devuelven crudas.
            body = text

    if is_json:
        error = error_from_body(body, response.status_code)
        if error is not None:
            raise error

    return Envelope(
        body=body,
        meta=RateLimitMeta.from_headers(response.headers),
        status_code=response.status_code,
        is_json=is_json,
    )


class RequestPipeline:
    """Implementación HTTP de `Requester`.

    No guarda estado mutable: cada `execute` abre su propio `httpx.AsyncClient`
    con la configuración inmutable del cliente.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config
        self._transport = transport

    @property
    def config(self) -> ClientConfig:
        return self._config

    def build(self, method: str, path: str, params: Mapping[str, Any] | None = None) -> RequestDescriptor:
        return build_request(self._config, method, path, params)

    async def execute(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Envelope:
        request = self.build(method, path, params)
        logger.debug("Requesting [%s] %s with data %r", request.method, request.url, params)

        try:
            async with build_async_client(self._config, transport=self._transport) as client:
                if request.has_body:
                    response = await client.request(
                        request.method,
                        request.url,
                        json=request.body,
                        headers=request.headers,
                    )
                else:
                    # La query ya presente en la URL (p.ej. `pages.next`) se conserva.
                    url = httpx.URL(request.url).copy_merge_params(request.params)
                    response = await client.request(
                        request.method,
                        url,
                        headers=request.headers,
                    )
        except httpx.TimeoutException as exc:
            raise TransportError(
                f"Request to {PROVIDER} timed out after {self._config.timeout:g}ms",
                cause=exc,
            ) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"Request to {PROVIDER} failed: {exc}", cause=exc) from exc

        return parse_response(response)
