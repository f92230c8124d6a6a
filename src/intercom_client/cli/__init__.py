"""CLI (Typer + Rich) para llamadas puntuales y diagnóstico."""
