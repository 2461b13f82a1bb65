"""``switchyard run`` — serve an app with uvicorn."""

import argparse
import sys

from switchyard.cli._resolve import resolve_app


def run_app(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and serve it; CLI flags override app config."""
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    host = app.config.host if args.host is None else args.host
    port = app.config.port if args.port is None else args.port

    def on_ready() -> None:
        print(f"switchyard: serving {args.app} on http://{host}:{port}", file=sys.stderr)

    app.listen(port, on_ready, host=host)
