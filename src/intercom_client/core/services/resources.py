"""Tabla declarativa de operaciones por recurso.

Cada método público del cliente (`create_user`, `list_companies`, ...) es una
fila de esta tabla: verbo HTTP, path y la regla de sustitución del `id`.
`resolve_operation` convierte (nombre, parámetros) en la tripleta que consume
el pipeline; no hay lógica adicional por recurso.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Operation:
    """Una operación de la API.

    - `path`: path sin id (None si el id es obligatorio).
    - `by_id`: plantilla usada cuando los parámetros traen `id`.
    - `keep_params`: con `by_id`, enviar igualmente los parámetros (si no, `{}`).
    """

    method: str
    path: str | None
    by_id: str | None = None
    keep_params: bool = False


OPERATIONS: dict[str, Operation] = {
    # Users
    "get_users": Operation("GET", "users"),
    "get_user": Operation("GET", "users"),
    "view_user": Operation("GET", "users", by_id="users/{id}"),
    "create_user": Operation("POST", "users"),
    "update_user": Operation("POST", "users"),
    "delete_user": Operation("DELETE", "users", by_id="users/{id}"),
    "bulk_add_users": Operation("POST", "bulk/users"),
    # Contacts
    "create_contact": Operation("POST", "contacts"),
    "update_contact": Operation("POST", "contacts"),
    "delete_contact": Operation("DELETE", "contacts"),
    "get_contact": Operation("GET", "contacts"),
    "get_contacts": Operation("GET", "contacts"),
    "view_contact": Operation("GET", "contacts"),
    "convert_contact": Operation("POST", "contacts/convert"),
    # Companies
    "list_companies": Operation("GET", "companies"),
    "view_company": Operation("GET", "companies", by_id="companies/{id}"),
    "create_company": Operation("POST", "companies"),
    "update_company": Operation("POST", "companies"),
    "list_company_users": Operation("GET", "companies", by_id="companies/{id}/users"),
    # Admins
    "list_admins": Operation("GET", "admins"),
    # Notes
    "create_note": Operation("POST", "notes"),
    "list_notes": Operation("GET", "notes"),
    "view_note": Operation("GET", "notes", by_id="notes/{id}"),
    # Tags
    "get_tag": Operation("GET", "tags"),
    "create_tag": Operation("POST", "tags"),
    "update_tag": Operation("POST", "tags"),
    "delete_tag": Operation("DELETE", None, by_id="tags/{id}"),
    # Segments
    "list_segments": Operation("GET", "segments"),
    "view_segment": Operation("GET", "segments", by_id="segments/{id}"),
    # Events
    "create_event": Operation("POST", "events"),
    # Counts
    "get_counts": Operation("GET", "counts"),
    # Conversations (solo planes Starter/Premium)
    "create_user_message": Operation("POST", "messages"),
    "list_conversations": Operation("GET", "conversations"),
    "get_conversation": Operation("GET", "conversations", by_id="conversations/{id}"),
    # Sin `id` responde a la última conversación.
    "reply_conversation": Operation(
        "POST", "conversations/last/reply", by_id="conversations/{id}/reply", keep_params=True
    ),
    # Cerrar es responder con un cuerpo especial.
    "close_conversation": Operation(
        "POST", "conversations/last/reply", by_id="conversations/{id}/reply", keep_params=True
    ),
    "mark_conversation_as_read": Operation(
        "PUT", "conversations/last", by_id="conversations/{id}", keep_params=True
    ),
}


def resolve_operation(
    name: str,
    params: Mapping[str, Any] | None = None,
    methods: Mapping[str, str] | None = None,
) -> tuple[str, str, dict[str, Any]]:
    """Resuelve una operación en `(verbo, path, parámetros)`.

    `methods` permite sobrescribir el verbo por operación
    (p.ej. `{"update_user": "PUT"}`).
    """

    try:
        op = OPERATIONS[name]
    except KeyError:
        raise AttributeError(f"Unknown Intercom operation: {name!r}") from None

    data = dict(params or {})
    method = (methods or {}).get(name, op.method)

    if op.by_id and data.get("id") is not None:
        path = op.by_id.format(id=data["id"])
        return method, path, data if op.keep_params else {}

    if op.path is None:
        raise ValueError(f"{name} requires an 'id' parameter")
    return method, op.path, data
