"""Handler protocol.

A pipeline handler is any callable matching::

    def handler(request: Request, response: Response, next: Next) -> None: ...

``async def`` works the same way. No base class required.

The handler calls ``next()`` to let the following handler run after it
returns. Skipping the call ends the pipeline, which is how a handler
that has already written the final response (an auth check, a cache
hit) keeps the rest of the route from running.

``next()`` only records the decision. The pipeline reads it once the
handler returns, which has two consequences:

- Code written after ``next()`` runs before the following handlers,
  not after them. There is no way to post-process their output.
- ``next`` must be called before the handler returns (or, for
  ``async def``, before its coroutine finishes). Handing it to a
  callback such as ``loop.call_soon(next)`` ends the pipeline, and the
  later call does nothing.
"""

from typing import Any, Protocol

from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.pipeline import Next


class Middleware(Protocol):
    """Protocol for switchyard handlers.

    Accepts both functions and callable objects::

        # Function handler
        def require_json(request, response, next):
            if request.content_type != "application/json":
                response.send("Expected JSON", status=415)
                return
            next()

        # Class handler
        class Counter:
            def __init__(self) -> None:
                self.hits = 0

            async def __call__(self, request, response, next):
                self.hits += 1
                next()
    """

    def __call__(self, request: Request, response: Response, next: Next) -> Any: ...
