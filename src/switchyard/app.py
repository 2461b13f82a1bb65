"""Switchyard application class.

Mutable during setup (route registration). Frozen at runtime when
``app.listen()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from switchyard._internal.asgi import Receive, Scope, Send
from switchyard._internal.types import Handler
from switchyard.config import AppConfig
from switchyard.dispatcher import Dispatcher
from switchyard.errors import ConfigurationError
from switchyard.routing.router import Router
from switchyard.server.handler import handle_request

logger = logging.getLogger("switchyard.server")

METHODS: frozenset[str] = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"})


@dataclass(slots=True)
class _PendingRoute:
    """A registration call waiting to be compiled into the Router."""

    method: str
    path: str
    handlers: tuple[Handler, ...]


class App:
    """The switchyard application.

    Register routes with one call per HTTP method. Each route gets one or
    more handlers, run in order::

        app = App()

        def load_item(request, response, next):
            request.state["item"] = store.get(request.params["id"])
            next()

        def show_item(request, response, next):
            response.json(request.state["item"])

        app.get("/items/:id", load_item, show_item)

    Called without handlers, the registration methods act as decorators::

        @app.post("/items")
        async def create_item(request, response, next):
            ...

    Thread safety:
        Registration is single-threaded setup work. The freeze transition
        uses a Lock + double-check so exactly one thread compiles the
        route table even if an ASGI server calls ``__call__()``
        concurrently on first request. After that the table is read-only.
    """

    __slots__ = (
        "_dispatcher",
        "_freeze_lock",
        "_frozen",
        "_pending_routes",
        "_router",
        "config",
    )

    def __init__(self, config: AppConfig | None = None) -> None:
        self.config: AppConfig = config or AppConfig()
        self._pending_routes: list[_PendingRoute] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

        # Compiled state — set during _freeze()
        self._router: Router | None = None
        self._dispatcher: Dispatcher | None = None

    # -- Route registration --

    def add_route(
        self, method: str, path: str, *handlers: Handler
    ) -> Callable[[Handler], Handler] | None:
        """Register handlers for *method* and *path*.

        Registering the same method and path again appends to its
        handler list. With no handlers, returns a decorator that
        registers the decorated function.

        Raises ``ConfigurationError`` for an unsupported method or a
        non-callable handler.
        """
        self._check_not_frozen()
        method = method.upper()
        if method not in METHODS:
            msg = f"Unsupported HTTP method {method!r}. Expected one of: {', '.join(sorted(METHODS))}"
            raise ConfigurationError(msg)

        if not handlers:

            def decorator(func: Handler) -> Handler:
                self.add_route(method, path, func)
                return func

            return decorator

        for handler in handlers:
            if not callable(handler):
                msg = f"Handler for {method} {path!r} is not callable: {handler!r}"
                raise ConfigurationError(msg)

        self._pending_routes.append(_PendingRoute(method, path, handlers))
        return None

    def get(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        """Register GET handlers for *path*."""
        return self.add_route("GET", path, *handlers)

    def post(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        """Register POST handlers for *path*."""
        return self.add_route("POST", path, *handlers)

    def put(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        """Register PUT handlers for *path*."""
        return self.add_route("PUT", path, *handlers)

    def patch(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        """Register PATCH handlers for *path*."""
        return self.add_route("PATCH", path, *handlers)

    def delete(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        """Register DELETE handlers for *path*."""
        return self.add_route("DELETE", path, *handlers)

    def head(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        return self.add_route("HEAD", path, *handlers)

    def options(self, path: str, *handlers: Handler) -> Callable[[Handler], Handler] | None:
        return self.add_route("OPTIONS", path, *handlers)

    @property
    def router(self) -> Router:
        """The compiled route table. Freezes the app on first access."""
        self._ensure_frozen()
        assert self._router is not None
        return self._router

    # -- Server --

    def listen(
        self,
        port: int | None = None,
        on_ready: Callable[[], Any] | None = None,
        *,
        host: str | None = None,
    ) -> None:
        """Freeze the app and serve it over HTTP until interrupted.

        Args:
            port: Override ``config.port``. ``0`` asks the OS for a free port.
            on_ready: Called once the socket is bound and accepting.
            host: Override ``config.host``.
        """
        self._ensure_frozen()

        from switchyard.server.runner import run_server

        run_server(
            self,
            self.config.host if host is None else host,
            self.config.port if port is None else port,
            on_ready=on_ready,
            log_level=self.config.log_level,
        )

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point.

        Handles the lifespan scope directly and delegates HTTP scopes to
        the request handler.
        """
        if scope["type"] == "lifespan":
            await self._handle_lifespan(receive, send)
            return

        self._ensure_frozen()

        assert self._dispatcher is not None

        await handle_request(
            scope,
            receive,
            send,
            dispatcher=self._dispatcher,
            debug=self.config.debug,
        )

    async def _handle_lifespan(self, receive: Receive, send: Send) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the app at startup so configuration errors surface before
        the server accepts its first request.
        """
        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    self._ensure_frozen()
                except Exception as exc:
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return
                await send({"type": "lifespan.startup.complete"})

            elif msg_type == "lifespan.shutdown":
                await send({"type": "lifespan.shutdown.complete"})
                return

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._freeze()

    def _freeze(self) -> None:
        """Compile the route table and build the dispatcher.

        MUST only be called while holding _freeze_lock.
        """
        router = Router()
        for pending in self._pending_routes:
            router.add(pending.method, pending.path, *pending.handlers)
        router.compile()
        self._router = router
        self._dispatcher = Dispatcher(
            router,
            not_found_body=self.config.not_found_body,
            bad_request_body=self.config.bad_request_body,
        )
        self._frozen = True
        logger.debug("Compiled %d routes", len(router))

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the app after it has started serving requests. "
                "Register routes before calling app.listen()."
            )
            raise RuntimeError(msg)
