"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras (Pydantic v2).
- El dominio no conoce HTTP ni CLI: solo el sobre de respuesta y su metadata.
"""

from intercom_client.core.domain.models import Envelope, RateLimitMeta

__all__ = ["Envelope", "RateLimitMeta"]
