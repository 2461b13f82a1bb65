"""Write a finished Response out as ASGI messages.

A Response is fully buffered by the time it gets here, so every reply
is one ``http.response.start`` and one ``http.response.body``.
"""

from switchyard._internal.asgi import Send
from switchyard.http.response import Response

# 1xx, 204 and 304 never carry a message body
_BODILESS = frozenset({204, 304})


def _encode(name: str, value: str) -> tuple[bytes, bytes]:
    return name.lower().encode("latin-1"), value.encode("latin-1")


async def send_response(response: Response, send: Send, *, head: bool = False) -> None:
    """Send *response* through *send*.

    ``Content-Length`` is computed from the written chunks unless a
    handler set one itself. With ``head=True`` the headers describe the
    body a GET would have produced, but no body bytes are sent.
    """
    body = b"" if response.status < 200 or response.status in _BODILESS else response.body_bytes

    headers = [_encode("content-type", response.content_type)]
    headers.extend(_encode(name, value) for name, value in response.headers)
    if response.get_header("content-length") is None:
        headers.append(_encode("content-length", str(len(body))))

    await send({"type": "http.response.start", "status": response.status, "headers": headers})
    await send({"type": "http.response.body", "body": b"" if head else body})
