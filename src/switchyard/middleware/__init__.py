"""Middleware — Protocol-based pipeline handlers, no inheritance required.

A handler is any callable matching:
    def handler(request: Request, response: Response, next: Next) -> None

Built-in handlers (always first in every pipeline):
    decorate_query -- Decode the query string into ``request.query``
    ParamsDecorator -- Re-match the route table into ``request.params``
"""

from switchyard.middleware.builtin import ParamsDecorator, decorate_query
from switchyard.middleware.protocol import Middleware

__all__ = [
    "Middleware",
    "ParamsDecorator",
    "decorate_query",
]
