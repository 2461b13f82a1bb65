"""Switchyard — a minimal HTTP request dispatcher.

Matches each request against an ordered table of method + path patterns
(with ``:name`` segments) and runs the matched route's handlers as a
continuation-passing pipeline.

Basic usage::

    from switchyard import App

    app = App()

    def show_item(request, response, next):
        response.json({"id": request.params["id"], "query": request.query})

    app.get("/items/:id", show_item)

    app.listen(3000, lambda: print("ready"))
"""

__version__ = "0.1.0"
__all__ = [
    "App",
    "AppConfig",
    "ConfigurationError",
    "HTTPError",
    "MalformedURL",
    "Middleware",
    "Next",
    "NotFound",
    "Request",
    "Response",
    "Router",
    "SwitchyardError",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import switchyard`` fast while providing a clean top-level API.
    """
    if name == "App":
        from switchyard.app import App

        return App

    if name == "AppConfig":
        from switchyard.config import AppConfig

        return AppConfig

    if name == "Request":
        from switchyard.http.request import Request

        return Request

    if name == "Response":
        from switchyard.http.response import Response

        return Response

    if name == "Router":
        from switchyard.routing.router import Router

        return Router

    if name == "Next":
        from switchyard.pipeline import Next

        return Next

    if name == "Middleware":
        from switchyard.middleware.protocol import Middleware

        return Middleware

    if name in ("SwitchyardError", "ConfigurationError", "HTTPError", "MalformedURL", "NotFound"):
        from switchyard import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
