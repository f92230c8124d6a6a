"""Fachada pública del cliente de Intercom.

Este módulo junta las piezas:
- `resolve_config` normaliza credenciales/opciones una sola vez.
- `RequestPipeline` hace cada intercambio HTTP.
- `collect_all_pages` recorre listas paginadas.
- `OPERATIONS` genera los métodos por recurso (`create_user`, ...).

Todas las llamadas devuelven una `asyncio.Task` y aceptan opcionalmente un
callback `(error, result)` suscrito a esa misma tarea.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any

import httpx

from intercom_client.adapters.callbacks import Callback, schedule
from intercom_client.adapters.pagination import collect_all_pages
from intercom_client.adapters.pipeline import RequestPipeline
from intercom_client.core.config import (
    DEFAULT_OPTIONS,
    ClientConfig,
    ClientSettings,
    CredentialsInput,
    resolve_config,
)
from intercom_client.core.dates import to_epoch
from intercom_client.core.domain.models import Envelope
from intercom_client.core.services.resources import OPERATIONS, resolve_operation


class Intercom:
    """Cliente de la API de Intercom.

    Uso:

        client = Intercom("APP_ID", "API_KEY")
        users = await client.get_users()
        companies = await client.get_pages("companies")

    Las llamadas deben hacerse desde un event loop en ejecución.
    """

    default_options = DEFAULT_OPTIONS

    def __init__(
        self,
        credentials: CredentialsInput,
        api_key: str | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = resolve_config(credentials, api_key, options)
        self._pipeline = RequestPipeline(self._config, transport=transport)

    @classmethod
    def create(
        cls,
        credentials: CredentialsInput,
        api_key: str | None = None,
        options: Mapping[str, Any] | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Intercom":
        return cls(credentials, api_key, options, transport=transport)

    @classmethod
    def from_env(
        cls,
        settings: ClientSettings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> "Intercom":
        """Construye el cliente desde `INTERCOM_*` (o `.env`)."""

        settings = settings or ClientSettings()
        return cls(settings.to_credentials(), options=settings.to_options(), transport=transport)

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def endpoint(self) -> str:
        return self._config.endpoint

    @property
    def app_id(self) -> str:
        return self._config.identity

    @property
    def api_key(self) -> str:
        return self._config.secret

    @property
    def options(self) -> dict[str, Any]:
        return dict(self._config.options)

    @staticmethod
    def date(value: Any = None) -> int:
        """Fecha en segundos desde epoch (formato de la API)."""

        return to_epoch(value)

    def request(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> "asyncio.Task[Envelope]":
        """Primitiva de bajo nivel: una petición autenticada a la API."""

        return schedule(self._pipeline.execute(method, path, params), callback)

    def get_pages(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
        *,
        key: str | None = None,
    ) -> "asyncio.Task[list[Any]]":
        """Todos los elementos de un recurso paginado (p.ej. `companies`).

        Las páginas se piden una detrás de otra siguiendo `pages.next`.
        """

        return schedule(collect_all_pages(self._pipeline, path, params, key=key), callback)

    def call(
        self,
        operation: str,
        params: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> "asyncio.Task[Envelope]":
        """Despacha una operación de la tabla `OPERATIONS` por nombre."""

        method, path, data = resolve_operation(operation, params, self._config.methods)
        return self.request(method, path, data, callback)

    def __repr__(self) -> str:
        return f"Intercom(app_id={self._config.identity!r}, endpoint={self._config.endpoint!r})"


def _operation_method(name: str):
    op = OPERATIONS[name]

    def method(
        self: Intercom,
        params: Mapping[str, Any] | None = None,
        callback: Callback | None = None,
    ) -> "asyncio.Task[Envelope]":
        return self.call(name, params, callback)

    method.__name__ = name
    method.__qualname__ = f"Intercom.{name}"
    method.__doc__ = f"{op.method} {op.path or op.by_id} (verbo configurable con la opción `methods`)."
    return method


for _name in OPERATIONS:
    setattr(Intercom, _name, _operation_method(_name))
del _name
