"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- El sobre de respuesta (`Envelope`) y la metadata de rate-limit tienen una
  forma estable aunque el cuerpo de cada recurso sea arbitrario.
- Las cabeceras llegan como strings; la validación las convierte a enteros.

Nota:
- El cuerpo de la API se conserva tal cual: no validamos esquemas de recursos.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

RATELIMIT_HEADERS: dict[str, str] = {
    "ratelimit_limit": "x-ratelimit-limit",
    "ratelimit_remaining": "x-ratelimit-remaining",
    "ratelimit_reset": "x-ratelimit-reset",
}


class RateLimitMeta(BaseModel):
    """Contadores de rate-limit copiados de las cabeceras de respuesta."""

    model_config = ConfigDict(frozen=True)

    ratelimit_limit: int | None = Field(
        default=None,
        description="Peticiones permitidas por ventana.",
    )
    ratelimit_remaining: int | None = Field(
        default=None,
        description="Peticiones restantes en la ventana actual.",
    )
    ratelimit_reset: int | None = Field(
        default=None,
        description="Epoch (segundos) en que se reinicia la ventana.",
    )

    @field_validator("ratelimit_limit", "ratelimit_remaining", "ratelimit_reset", mode="before")
    @classmethod
    def _lenient_int(cls, value: Any) -> int | None:
        if value is None or value == "":
            return None
        try:
            return int(str(value).strip())
        except ValueError:
            return None

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> "RateLimitMeta":
        return cls(**{field: headers.get(header) for field, header in RATELIMIT_HEADERS.items()})


class Envelope(BaseModel):
    """Resultado normalizado de una llamada.

    `body` es el JSON parseado o, si no era JSON (p.ej. un 204 vacío), el texto
    crudo. Cuando `body` es un objeto se puede leer como un mapping:
    `envelope["users"]`, `envelope.get("pages")`.
    """

    model_config = ConfigDict(frozen=True)

    body: Any = Field(
        default=None,
        description="Cuerpo de la respuesta (JSON parseado o texto crudo).",
    )
    meta: RateLimitMeta = Field(
        default_factory=RateLimitMeta,
        description="Metadata de rate-limit.",
    )
    status_code: int | None = Field(
        default=None,
        description="Código HTTP de la respuesta.",
    )
    is_json: bool = Field(
        default=True,
        description="False cuando el cuerpo se devolvió sin parsear.",
    )

    def __getitem__(self, key: str) -> Any:
        if not isinstance(self.body, Mapping):
            raise KeyError(key)
        return self.body[key]

    def __contains__(self, key: object) -> bool:
        return isinstance(self.body, Mapping) and key in self.body

    def get(self, key: str, default: Any = None) -> Any:
        if isinstance(self.body, Mapping):
            return self.body.get(key, default)
        return default

    @property
    def next_page(self) -> str | None:
        """URL de la siguiente página (`pages.next`), si existe."""

        pages = self.get("pages")
        if isinstance(pages, Mapping):
            nxt = pages.get("next")
            if isinstance(nxt, str) and nxt:
                return nxt
        return None
