"""Switchyard exception hierarchy.

Shared across Router, Dispatcher, App, and the ASGI handler so every
module raises and catches the same types.
"""

from dataclasses import dataclass


class SwitchyardError(Exception):
    """Base for all switchyard-specific errors."""


class ConfigurationError(SwitchyardError):
    """Raised when routes or app configuration are invalid.

    Typically raised during registration, before the app serves requests.
    """


@dataclass(frozen=True, slots=True)
class HTTPError(SwitchyardError):
    """An error that maps directly to an HTTP status code.

    Handlers may raise these to abort with a specific status. The ASGI
    handler catches them and turns them into a response.
    """

    status: int
    detail: str = ""
    headers: tuple[tuple[str, str], ...] = ()

    def __str__(self) -> str:
        if self.detail:
            return f"{self.status}: {self.detail}"
        return str(self.status)


class NotFound(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """404 raised by a handler, e.g. when a path id names no record.

    The dispatcher does not raise this when no route matches. It writes
    ``AppConfig.not_found_body`` straight into the response instead.
    """

    def __init__(self, detail: str = "Not Found") -> None:
        super().__init__(status=404, detail=detail)


class MalformedURL(HTTPError):  # noqa: N818 — conventional name in web frameworks
    """400 — a path segment or query component has invalid percent-encoding."""

    def __init__(self, value: str, detail: str = "") -> None:
        super().__init__(status=400, detail=detail or f"Malformed URL component: {value!r}")
