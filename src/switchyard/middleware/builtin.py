"""Built-in decoration handlers.

The dispatcher places these two ahead of the user handlers in every
pipeline, so by the time user code runs ``request.query`` and
``request.params`` are populated.
"""

from switchyard.http.query import parse_query
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.pipeline import Next
from switchyard.routing.matcher import canonicalize
from switchyard.routing.router import Router


def decorate_query(request: Request, response: Response, next: Next) -> None:
    """Decode the query string onto ``request.query``.

    Raises ``MalformedURL`` (400) on invalid percent-encoding.
    """
    request.query = parse_query(request.query_string)
    next()


class ParamsDecorator:
    """Populate ``request.params`` by matching the route table again.

    This is a second, independent match rather than a reuse of the
    dispatcher's result; both pick the same pattern because the table
    is frozen while serving.
    """

    __slots__ = ("router",)

    def __init__(self, router: Router) -> None:
        self.router = router

    def __call__(self, request: Request, response: Response, next: Next) -> None:
        key = canonicalize(request.url, request.method)
        request.params = self.router.params(key)
        next()
