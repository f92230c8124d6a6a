"""Core: configuración, dominio, errores y servicios (sin detalles de HTTP)."""
