"""Recorrido de listas paginadas.

Cada respuesta de lista trae `pages.next` con la URL de la página siguiente.
Las páginas se piden en serie: la URL de cada una solo se conoce cuando llega
la anterior.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from intercom_client.core.domain.models import Envelope
from intercom_client.core.interfaces.requester import Requester

logger = logging.getLogger(__name__)


async def fetch_pages(
    requester: Requester,
    path: str,
    params: Mapping[str, Any] | None = None,
) -> list[Envelope]:
    """Devuelve todas las páginas visitadas, empezando por la raíz.

    Cualquier fallo aborta el recorrido y se propaga (sin resultados parciales).
    """

    root = await requester.execute("GET", path, params)
    pages = [root]
    next_url = root.next_page
    while next_url:
        logger.debug("Following page %d: %s", len(pages) + 1, next_url)
        page = await requester.execute("GET", next_url, params)
        pages.append(page)
        next_url = page.next_page
    return pages


def default_items_key(path: str) -> str:
    """Clave de la lista a partir del path: `/companies?per_page=5` -> `companies`."""

    return path.split("?", 1)[0].strip("/")


async def collect_all_pages(
    requester: Requester,
    path: str,
    params: Mapping[str, Any] | None = None,
    *,
    key: str | None = None,
) -> list[Any]:
    """Concatena los elementos de todas las páginas en orden de visita.

    `key` es la clave de la lista en cada página; por defecto el propio `path`
    (`companies` -> `page["companies"]`). Las páginas sin esa clave no aportan
    elementos.
    """

    items_key = key or default_items_key(path)
    items: list[Any] = []
    for page in await fetch_pages(requester, path, params):
        chunk = page.get(items_key)
        if isinstance(chunk, list):
            items.extend(chunk)
    return items
