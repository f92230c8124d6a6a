"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan los adaptadores concretos.
- El paginador y la tabla de recursos dependen del contrato, no de httpx.
"""

from intercom_client.core.interfaces.requester import Requester

__all__ = ["Requester"]
