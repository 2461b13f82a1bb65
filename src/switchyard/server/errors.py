"""Error mapping for faults that escape the dispatcher.

HTTPError exceptions keep their status. Anything else a handler raises
is logged and turned into a 500. The partially built response from the
failed pipeline is discarded in both cases.
"""

import logging
import traceback

from switchyard.errors import HTTPError
from switchyard.http.request import Request
from switchyard.http.response import Response

logger = logging.getLogger("switchyard.server")


def handle_http_error(exc: HTTPError, request: Request, *, debug: bool) -> Response:
    """Map an HTTPError raised inside the pipeline to a Response."""
    logger.debug("%d %s %s — %s", exc.status, request.method, request.url, exc.detail)

    detail = exc.detail or f"Error {exc.status}"
    if debug and exc.detail:
        detail = f"{exc.status}: {exc.detail}"

    response = Response(status=exc.status)
    for name, value in exc.headers:
        response.set_header(name, value)
    response.end(detail)
    return response


def handle_internal_error(exc: Exception, request: Request, *, debug: bool) -> Response:
    """Handle unexpected handler exceptions as 500 errors."""
    logger.exception("500 %s %s", request.method, request.url)

    response = Response(status=500)
    if debug:
        response.end("".join(traceback.format_exception(exc)))
    else:
        response.end("Internal Server Error")
    return response
