"""Script de ejecución.

Por qué existe:
- Permite ejecutar la CLI con `python -m intercom_client` durante desarrollo.
- Mantiene un entrypoint simple además del script de consola.
"""

from __future__ import annotations

from intercom_client.cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
