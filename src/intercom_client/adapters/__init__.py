"""Adaptadores de I/O (HTTP): pipeline, paginación y puente de callbacks."""
