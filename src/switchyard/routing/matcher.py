"""Path matching — canonical keys, pattern parsing, and param extraction.

A request is reduced to a canonical key before matching::

    canonicalize("/api/v1/users?id=1", "get")  -> "/api/v1/users/GET"
    canonicalize("/", "GET")                   -> "//GET"

Registered patterns live in the same shape (path + ``/`` + METHOD), so
matching is a segment-by-segment comparison of two canonical strings.
"""

import logging
import re
from urllib.parse import unquote_to_bytes

from switchyard.errors import MalformedURL
from switchyard.routing.route import PathSegment, Pattern

logger = logging.getLogger("switchyard.routing")

PARAM_SIGIL = ":"

_PARAM_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def split_url(url: str) -> tuple[str, str]:
    """Split a raw request URL into ``(path, query_string)``.

    A ``?`` is only a query delimiter inside the final path segment, so
    ``/a?b/c`` has no query string at all.
    """
    head, sep, last = url.rpartition("/")
    if "?" not in last:
        return url, ""
    segment, _, query = last.partition("?")
    return f"{head}{sep}{segment}", query


def canonicalize(url: str, method: str) -> str:
    """Reduce a request URL and method to its canonical match key."""
    path, _ = split_url(url)
    segments = path.split("/")[1:]
    return f"/{'/'.join(segments)}/{method.upper()}"


def decode_component(value: str) -> str:
    """Percent-decode one URL component.

    Unlike ``urllib.parse.unquote`` this is strict: a stray ``%`` or an
    escape sequence that is not valid UTF-8 raises ``MalformedURL``.
    ``+`` is left alone.
    """
    if "%" not in value:
        return value
    if _BAD_ESCAPE.search(value):
        raise MalformedURL(value)
    try:
        return unquote_to_bytes(value).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MalformedURL(value) from exc


def _parse_segment(part: str, path: str) -> PathSegment:
    if not part.startswith(PARAM_SIGIL):
        return PathSegment(part)
    name = part[len(PARAM_SIGIL) :]
    if _PARAM_NAME.fullmatch(name):
        return PathSegment(part, param_name=name)
    # Accepted as a literal so existing routes keep matching byte-for-byte.
    logger.warning(
        "Segment %r in route %r is not a valid placeholder; matching it literally",
        part,
        path,
    )
    return PathSegment(part)


def parse_pattern(path: str, method: str) -> Pattern:
    """Parse a registered route path into its canonical Pattern.

    Examples::

        parse_pattern("/users", "get")     -> source "/users/GET"
        parse_pattern("/users/:id", "GET") -> segments (users, :id -> id, GET)
        parse_pattern("/", "GET")          -> source "//GET"
    """
    method = method.upper()
    source = f"{path}/{method}"
    segments = tuple(_parse_segment(part, path) for part in source.split("/"))
    return Pattern(source=source, path=path, method=method, segments=segments)


def match_pattern(pattern: Pattern, key: str) -> dict[str, str] | None:
    """Test a canonical key against a pattern.

    Returns the decoded placeholder values on success and ``None`` when
    the key does not fit. Raises ``MalformedURL`` if a captured segment
    has invalid percent-encoding.
    """
    parts = key.split("/")
    if len(parts) != len(pattern.segments):
        return None

    captured: dict[str, str] = {}
    for segment, part in zip(pattern.segments, parts, strict=True):
        if segment.param_name is None:
            if segment.value != part:
                return None
        elif not part:
            return None
        else:
            captured[segment.param_name] = part

    return {name: decode_component(raw) for name, raw in captured.items()}
