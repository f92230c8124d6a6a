"""Errores del cliente.

Por qué una jerarquía propia:
- Los adaptadores traducen excepciones de `httpx` en el borde, así el resto
  del código (y el usuario) solo captura `IntercomError`.
- Cada subclase corresponde a una fase distinta: construcción, transporte o
  respuesta de la API.
"""

from __future__ import annotations

from typing import Any


class IntercomError(Exception):
    """Error base. Conserva el mensaje y la lista original de errores."""

    def __init__(self, message: str, errors: list[Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.errors: list[Any] = list(errors or [])

    def __str__(self) -> str:
        return self.message


class ConfigurationError(IntercomError):
    """Credenciales u opciones inválidas al construir el cliente."""


class TransportError(IntercomError):
    """Fallo de red: conexión, DNS o timeout."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ApiError(IntercomError):
    """La API respondió con un cuerpo `error`/`errors`."""

    def __init__(
        self,
        message: str,
        errors: list[Any] | None = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message, errors)
        self.status_code = status_code
