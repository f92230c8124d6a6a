"""Configuración del cliente.

Por qué aquí:
- Un único punto normaliza las credenciales y opciones de construcción,
  sin importar si llegan como argumentos posicionales, como un mapping o
  desde variables de entorno (pydantic-settings).
- El resultado (`ClientConfig`) es inmutable: el cliente puede compartirse
  entre muchas llamadas concurrentes sin locks.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Union

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic.config import ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict

from intercom_client.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://api.intercom.io/"
DEFAULT_TIMEOUT_MS = 60 * 1000

# Valores por defecto de las opciones reconocidas. Se pueden sobrescribir
# por instancia con `options={...}`.
DEFAULT_OPTIONS: dict[str, Any] = {
    "endpoint": DEFAULT_ENDPOINT,
    "timeout": DEFAULT_TIMEOUT_MS,
}

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})

_IDENTITY_KEYS = ("app_id", "appId", "personal_access_token", "personalAccessToken")
_SECRET_KEYS = ("api_key", "apiKey")


class Credentials(BaseModel):
    """Credenciales explícitas (alternativa tipada al mapping de opciones)."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    app_id: str | None = Field(
        default=None,
        alias="appId",
        description="App ID de Intercom (usuario de Basic auth).",
    )
    personal_access_token: str | None = Field(
        default=None,
        alias="personalAccessToken",
        description="Token personal; sustituye al App ID si está presente.",
    )
    api_key: str | None = Field(
        default=None,
        alias="apiKey",
        description="API key (password de Basic auth). Opcional.",
    )

    @property
    def identity(self) -> str | None:
        return self.app_id or self.personal_access_token


CredentialsInput = Union[Credentials, Mapping[str, Any], str, None]


class ClientConfig(BaseModel):
    """Configuración canónica e inmutable de un cliente."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    identity: str = Field(
        ...,
        min_length=1,
        description="Credencial de identidad (App ID o personal access token).",
    )
    secret: str = Field(
        default="",
        description="Credencial secreta; cadena vacía cuando no se usa.",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        min_length=8,
        description="URL base de la API. Siempre termina en '/'.",
    )
    timeout: float = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        description="Timeout por request (milisegundos).",
    )
    methods: dict[str, str] = Field(
        default_factory=dict,
        description="Verbo HTTP por operación (p.ej. {'update_user': 'PUT'}).",
    )
    options: dict[str, Any] = Field(
        default_factory=dict,
        description="Mapa completo de opciones tras mezclar con los defaults.",
    )

    @field_validator("identity")
    @classmethod
    def _identity_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("identity credential must not be blank")
        return value

    @field_validator("endpoint")
    @classmethod
    def _normalize_endpoint(cls, value: str) -> str:
        if not (value.startswith("http://") or value.startswith("https://")):
            raise ValueError(f"endpoint must be an http(s) URL: {value!r}")
        return value if value.endswith("/") else value + "/"

    @field_validator("methods")
    @classmethod
    def _normalize_methods(cls, value: dict[str, str]) -> dict[str, str]:
        out: dict[str, str] = {}
        for name, method in value.items():
            verb = str(method).upper()
            if verb not in HTTP_METHODS:
                raise ValueError(f"unsupported HTTP method for {name!r}: {method!r}")
            out[name] = verb
        return out

    @property
    def timeout_seconds(self) -> float:
        return self.timeout / 1000.0


class ClientSettings(BaseSettings):
    """Configuración desde entorno (`INTERCOM_*` o `.env`).

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) para la CLI y `from_env`.
    """

    model_config = SettingsConfigDict(
        env_prefix="INTERCOM_",
        extra="ignore",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_id: str | None = Field(
        default=None,
        description="App ID de Intercom.",
    )
    personal_access_token: str | None = Field(
        default=None,
        description="Personal access token (alternativa al App ID).",
    )
    api_key: str | None = Field(
        default=None,
        description="API key asociada al App ID.",
    )
    endpoint: str = Field(
        default=DEFAULT_ENDPOINT,
        min_length=8,
        description="URL base de la API.",
    )
    timeout_ms: float = Field(
        default=DEFAULT_TIMEOUT_MS,
        gt=0,
        description="Timeout por request (milisegundos).",
    )

    def to_credentials(self) -> Credentials:
        return Credentials(
            app_id=self.app_id,
            personal_access_token=self.personal_access_token,
            api_key=self.api_key,
        )

    def to_options(self) -> dict[str, Any]:
        return {"endpoint": self.endpoint, "timeout": self.timeout_ms}


def _split_mapping(data: Mapping[str, Any]) -> tuple[str | None, str | None, dict[str, Any]]:
    identity = None
    for key in _IDENTITY_KEYS:
        if data.get(key):
            identity = data[key]
            break
    secret = None
    for key in _SECRET_KEYS:
        if data.get(key):
            secret = data[key]
            break
    rest = {k: v for k, v in data.items() if k not in _IDENTITY_KEYS and k not in _SECRET_KEYS}
    return identity, secret, rest


def merge_options(options: Mapping[str, Any] | None) -> dict[str, Any]:
    """Mezcla `options` sobre `DEFAULT_OPTIONS`. `None` cuenta como ausente."""

    merged = dict(DEFAULT_OPTIONS)
    for key, value in (options or {}).items():
        if value is not None:
            merged[key] = value
    return merged


def resolve_config(
    credentials: CredentialsInput,
    api_key: str | None = None,
    options: Mapping[str, Any] | None = None,
) -> ClientConfig:
    """Normaliza los argumentos de construcción en un `ClientConfig`.

    Formas aceptadas:
    - `resolve_config("app_id", "api_key", {"timeout": 5000})`
    - `resolve_config({"appId": "...", "apiKey": "...", "endpoint": "..."})`
    - `resolve_config(Credentials(personal_access_token="..."), options={...})`

    La API key es opcional (se envía como password vacío).
    """

    identity: str | None
    secret: str | None = api_key
    extra: dict[str, Any] = dict(options or {})

    if isinstance(credentials, Credentials):
        identity = credentials.identity
        secret = credentials.api_key or secret
    elif isinstance(credentials, Mapping):
        identity, mapped_secret, rest = _split_mapping(credentials)
        secret = mapped_secret or secret
        extra = {**rest, **extra}
    elif credentials is None or isinstance(credentials, str):
        identity = credentials
    else:
        raise ConfigurationError(f"Unsupported credentials type: {type(credentials).__name__}")

    if not identity or not str(identity).strip():
        raise ConfigurationError(f"Invalid App ID: {identity!r}")

    merged = merge_options(extra)
    try:
        config = ClientConfig(
            identity=str(identity),
            secret=str(secret or ""),
            endpoint=merged["endpoint"],
            timeout=merged["timeout"],
            methods=dict(merged.get("methods") or {}),
            options=merged,
        )
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid client options: {exc}") from exc

    logger.debug("Client configured for %s (timeout=%sms)", config.endpoint, config.timeout)
    return config
