"""Puente future/callback.

Una sola operación asíncrona (`asyncio.Task`) es la fuente de verdad. Si el
usuario pasa un callback estilo `(error, result)`, se suscribe a esa misma
tarea: ambos ven exactamente el mismo resultado.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Callback = Callable[[Optional[BaseException], Any], None]

# El loop solo guarda referencias débiles a las tareas; sin esta referencia
# una llamada con solo callback podría recolectarse antes de terminar.
_pending: set[asyncio.Task[Any]] = set()


def _bridge(callback: Callback) -> Callable[["asyncio.Task[Any]"], None]:
    def _done(task: "asyncio.Task[Any]") -> None:
        if task.cancelled():
            callback(asyncio.CancelledError(), None)
            return
        exc = task.exception()
        if exc is not None:
            callback(exc, None)
        else:
            callback(None, task.result())

    return _done


def schedule(
    coro: Coroutine[Any, Any, T],
    callback: Callback | None = None,
) -> "asyncio.Task[T]":
    """Programa `coro` en el loop actual y devuelve la tarea.

    Requiere un event loop en ejecución (llamar desde código `async`).
    """

    try:
        loop = asyncio.get_running_loop()
    except RuntimeError:
        coro.close()
        raise RuntimeError("Intercom calls must be made from inside a running event loop") from None

    task = loop.create_task(coro)
    _pending.add(task)
    task.add_done_callback(_pending.discard)
    if callback is not None:
        task.add_done_callback(_bridge(callback))
    return task
