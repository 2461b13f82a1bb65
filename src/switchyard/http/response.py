"""Mutable per-request response context.

Handlers set the status, add headers, and write body chunks. ``end()``
marks the response as finished; the ASGI handler sends whatever the
pipeline produced once the last handler returns.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True)
class Response:
    """Response context built up by pipeline handlers.

    Setters return ``self`` so calls can be chained::

        response.set_status(201).set_header("Location", "/items/7").end("Created")
    """

    status: int = 200
    content_type: str = "text/plain; charset=utf-8"
    headers: list[tuple[str, str]] = field(default_factory=list)
    finished: bool = False
    _chunks: list[bytes] = field(default_factory=list, repr=False)

    def set_status(self, status: int) -> Response:
        """Set the status code."""
        self.status = status
        return self

    def set_header(self, name: str, value: str) -> Response:
        """Add a response header. Repeated names are all sent."""
        if name.lower() == "content-type":
            self.content_type = value
        else:
            self.headers.append((name, value))
        return self

    def get_header(self, name: str) -> str | None:
        """Return the first value of header *name*, or ``None``."""
        if name.lower() == "content-type":
            return self.content_type
        for key, value in self.headers:
            if key.lower() == name.lower():
                return value
        return None

    def write(self, chunk: str | bytes) -> Response:
        """Append a chunk to the body. Strings are UTF-8 encoded."""
        if self.finished:
            msg = "Cannot write to a response that has already ended."
            raise RuntimeError(msg)
        self._chunks.append(chunk.encode("utf-8") if isinstance(chunk, str) else chunk)
        return self

    def end(self, chunk: str | bytes | None = None) -> None:
        """Write an optional final chunk and finish the response."""
        if chunk is not None:
            self.write(chunk)
        elif self.finished:
            msg = "Response has already ended."
            raise RuntimeError(msg)
        self.finished = True

    def send(self, body: str | bytes, status: int | None = None) -> None:
        """Finish the response with *body*, optionally setting the status."""
        if status is not None:
            self.status = status
        self.end(body)

    def json(self, data: Any, status: int | None = None) -> None:
        """Finish the response with *data* serialized as JSON."""
        self.content_type = "application/json"
        self.send(json_module.dumps(data, default=str), status)

    # -- Body helpers --

    @property
    def body_bytes(self) -> bytes:
        """Everything written so far, as bytes."""
        return b"".join(self._chunks)

    @property
    def text(self) -> str:
        """Everything written so far, as a string."""
        return self.body_bytes.decode("utf-8")
