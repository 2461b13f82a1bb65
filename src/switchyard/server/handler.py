"""ASGI handler — translates ASGI scope/messages to switchyard types.

The only component that touches raw ASGI for HTTP requests. Builds the
Request and Response contexts, hands them to the Dispatcher, and sends
the result back through ASGI send().
"""

import logging

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard.dispatcher import Dispatcher
from switchyard.errors import HTTPError
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.server.errors import handle_http_error, handle_internal_error
from switchyard.server.sender import send_response

logger = logging.getLogger("switchyard.server")


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    dispatcher: Dispatcher,
    debug: bool,
) -> None:
    """Process a single HTTP request through the dispatcher."""
    if scope["type"] != "http":
        return

    request = Request.from_asgi(scope, receive)
    response = Response()

    try:
        await dispatcher.dispatch(request, response)
    except HTTPError as exc:
        response = handle_http_error(exc, request, debug=debug)
    except Exception as exc:
        response = handle_internal_error(exc, request, debug=debug)

    if not response.finished:
        logger.debug(
            "%s %s: pipeline returned without ending the response", request.method, request.url
        )

    await send_response(response, send, head=request.method == "HEAD")
