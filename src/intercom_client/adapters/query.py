"""Codificación de query strings con claves anidadas.

La API acepta parámetros anidados al estilo `user[email]=x` / `ids[0]=1`.
`httpx` solo codifica valores planos, así que aplanamos antes.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _scalar(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _flatten(prefix: str, value: Any, out: list[tuple[str, str]]) -> None:
    if isinstance(value, Mapping):
        for key, inner in value.items():
            _flatten(f"{prefix}[{key}]", inner, out)
    elif isinstance(value, (list, tuple)):
        for index, inner in enumerate(value):
            _flatten(f"{prefix}[{index}]", inner, out)
    else:
        out.append((prefix, _scalar(value)))


def encode_query(params: Mapping[str, Any] | None) -> list[tuple[str, str]]:
    """Aplana `params` en pares (clave, valor) listos para `httpx`.

    - Mappings: `a[b]=c`
    - Secuencias: `a[0]=x&a[1]=y`
    - Booleanos: `true`/`false`; `None`: cadena vacía.
    """

    out: list[tuple[str, str]] = []
    for key, value in (params or {}).items():
        _flatten(str(key), value, out)
    return out
