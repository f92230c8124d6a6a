"""Fechas en el formato de la API (segundos desde epoch)."""

from __future__ import annotations

import math
from datetime import datetime, timezone


def to_epoch(value: datetime | int | float | str | None = None) -> int:
    """Convierte `value` a segundos desde epoch (entero, redondeo hacia abajo).

    - `None`: ahora.
    - `datetime`: si es naive se interpreta como UTC.
    - número: milisegundos desde epoch.
    - string: fecha ISO-8601.
    """

    if value is None:
        return math.floor(datetime.now(timezone.utc).timestamp())
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return math.floor(value.timestamp())
    if isinstance(value, bool):
        raise TypeError("booleans are not dates")
    if isinstance(value, (int, float)):
        return math.floor(value / 1000)
    if isinstance(value, str):
        return to_epoch(datetime.fromisoformat(value.replace("Z", "+00:00")))
    raise TypeError(f"Unsupported date value: {value!r}")
