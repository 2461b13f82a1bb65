"""Mutable per-request context.

One Request is created per inbound HTTP request and handed to every
handler in the pipeline. The built-in decorators fill in ``query`` and
``params``; user handlers may add their own data under ``state``.
"""

from __future__ import annotations

import json as json_module
from collections.abc import AsyncGenerator
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

from switchyard._internal.asgi import Receive, Scope
from switchyard.routing.matcher import split_url


@dataclass(slots=True)
class Request:
    """Request context: method, raw URL, decoded query and path params.

    ``url`` is the raw request target as the client sent it, query
    string included and still percent-encoded. ``path`` and
    ``query_string`` are derived from it using the same rule the
    matcher uses (a ``?`` only counts inside the last path segment).
    """

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)
    params: dict[str, str] = field(default_factory=dict)
    http_version: str = "1.1"
    client: tuple[str, int] | None = None
    state: dict[str, Any] = field(default_factory=dict)

    # Private: ASGI receive callable for body streaming
    _receive: Receive | None = field(default=None, repr=False, compare=False)
    _body: bytes | None = field(default=None, repr=False, compare=False)

    @property
    def path(self) -> str:
        """The request path without its query string (still encoded)."""
        return split_url(self.url)[0]

    @property
    def query_string(self) -> str:
        return split_url(self.url)[1]

    @property
    def content_type(self) -> str | None:
        return self.headers.get("content-type")

    # -- Async body access --

    async def stream(self) -> AsyncGenerator[bytes, None]:
        """Stream the request body in chunks."""
        if self._receive is None:
            return
        while True:
            message = await self._receive()
            body = message.get("body", b"")
            if body:
                yield body
            if not message.get("more_body", False):
                break

    async def body(self) -> bytes:
        """Read the full request body.

        Cached — the ASGI receive is consumed once.
        """
        if self._body is None:
            self._body = b"".join([chunk async for chunk in self.stream()])
        return self._body

    async def text(self) -> str:
        """Read the body as UTF-8 text."""
        return (await self.body()).decode("utf-8")

    async def json(self) -> Any:
        """Parse the body as JSON."""
        return json_module.loads(await self.body())

    # -- Factory --

    @classmethod
    def from_asgi(cls, scope: Scope, receive: Receive) -> Request:
        """Create a Request from an ASGI HTTP scope.

        Uses ``raw_path`` so percent-escapes reach the matcher undecoded.
        Servers that omit it get the decoded ``path`` re-quoted.
        """
        raw_path = scope.get("raw_path")
        if raw_path:
            path = raw_path.decode("latin-1")
        else:
            path = quote(scope["path"], safe="/:@!$&'()*+,;=")
        query_string = scope.get("query_string", b"").decode("latin-1")
        url = f"{path}?{query_string}" if query_string else path

        headers: dict[str, str] = {}
        for name, value in scope.get("headers", ()):
            headers[name.decode("latin-1").lower()] = value.decode("latin-1")

        client = scope.get("client")
        return cls(
            method=scope["method"],
            url=url,
            headers=headers,
            http_version=scope.get("http_version", "1.1"),
            client=tuple(client) if client else None,
            _receive=receive,
        )
