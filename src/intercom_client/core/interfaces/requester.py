"""Contrato del pipeline de peticiones.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite sustituir el pipeline HTTP real por un doble en tests.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Protocol, runtime_checkable

from intercom_client.core.domain.models import Envelope


@runtime_checkable
class Requester(Protocol):
    """Contrato mínimo: una llamada lógica -> un intercambio HTTP.

    Reglas de diseño:
    - `execute` es asíncrono porque hace I/O (HTTP).
    - Devuelve un `Envelope` o lanza una subclase de `IntercomError`.
    """

    async def execute(
        self,
        method: str,
        path: str,
        params: Mapping[str, Any] | None = None,
    ) -> Envelope:
        """Ejecuta la petición y devuelve el resultado normalizado."""

        ...
