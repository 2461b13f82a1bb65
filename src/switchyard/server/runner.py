"""Serving over a real socket.

Switchyard does not parse HTTP itself. ``run_server`` hands the live
App to uvicorn and drives it from an anyio task group so the caller can
be told when the listening socket is ready.
"""

from collections.abc import Callable
from typing import Any


def run_server(
    app: Any,
    host: str,
    port: int,
    *,
    on_ready: Callable[[], Any] | None = None,
    log_level: str = "info",
) -> None:
    """Serve *app* on ``host:port`` until interrupted.

    Blocks the calling thread. Uvicorn installs its own signal handlers,
    so Ctrl-C triggers a graceful shutdown.

    Args:
        app: ASGI callable (switchyard App instance).
        host: Bind host address.
        port: Bind port number.
        on_ready: Called once, with no arguments, after the socket is
            bound and the lifespan startup has completed.
        log_level: uvicorn log level name.
    """
    import anyio
    import uvicorn

    config = uvicorn.Config(app, host=host, port=port, log_level=log_level, lifespan="on")
    server = uvicorn.Server(config)

    async def serve() -> None:
        async with anyio.create_task_group() as tg:
            tg.start_soon(server.serve)
            if on_ready is None:
                return
            while not server.started:
                if server.should_exit:
                    return
                await anyio.sleep(0.05)
            on_ready()

    anyio.run(serve)
