"""Servicios: fachada del cliente y tabla de operaciones por recurso."""
