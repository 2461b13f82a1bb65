"""``switchyard routes`` — print the route table in match order."""

import argparse
import sys

from switchyard.cli._resolve import resolve_app


def _handler_name(handler: object) -> str:
    return getattr(handler, "__name__", None) or type(handler).__name__


def run_routes(args: argparse.Namespace) -> None:
    """Print METHOD, PATH and the handler chain for every route.

    Rows come out in registration order, which is also the order the
    dispatcher tries them in.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    router = app.router
    if not router.routes:
        print("No routes registered.")
        return

    rows = [
        (
            pattern.method,
            pattern.path,
            " -> ".join(_handler_name(h) for h in router.handlers(pattern)),
        )
        for pattern in router.routes
    ]

    max_method = max(6, *(len(r[0]) for r in rows))  # "METHOD" header
    max_path = max(4, *(len(r[1]) for r in rows))  # "PATH" header

    fmt = f"{{:<{max_method}}}  {{:<{max_path}}}  {{}}"
    print(fmt.format("METHOD", "PATH", "HANDLERS"))
    sep_len = max_method + max_path + 4 + max(len(r[2]) for r in rows)
    print("-" * min(sep_len, 80))
    for method, path, chain in rows:
        print(fmt.format(method, path, chain))
