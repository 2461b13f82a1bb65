"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(debug=True, port=3000)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 8000
    debug: bool = False  # Tracebacks in 500 bodies
    log_level: str = "info"  # Forwarded to uvicorn

    # Fixed bodies for responses produced before any handler runs
    not_found_body: str = "Not Found"
    bad_request_body: str = "Bad Request"
