"""Cliente asíncrono para la API de Intercom.

Uso:
    from intercom_client import Intercom
    client = Intercom("APP_ID", "API_KEY")
    users = await client.get_users()
"""

__version__ = "0.3.0"

from intercom_client.core.config import (  # noqa: E402
    DEFAULT_OPTIONS,
    ClientConfig,
    ClientSettings,
    Credentials,
)
from intercom_client.core.domain.models import Envelope, RateLimitMeta  # noqa: E402
from intercom_client.core.errors import (  # noqa: E402
    ApiError,
    ConfigurationError,
    IntercomError,
    TransportError,
)
from intercom_client.core.services.client import Intercom  # noqa: E402

create = Intercom.create

__all__ = [
    "DEFAULT_OPTIONS",
    "ApiError",
    "ClientConfig",
    "ClientSettings",
    "ConfigurationError",
    "Credentials",
    "Envelope",
    "Intercom",
    "IntercomError",
    "RateLimitMeta",
    "TransportError",
    "__version__",
    "create",
]
