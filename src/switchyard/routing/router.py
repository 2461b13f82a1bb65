"""Insertion-ordered route table with first-match linear scanning.

Patterns are registered during setup and frozen before the app serves
requests. Matching walks the table in registration order, so when two
patterns accept the same key (``/users/me`` and ``/users/:id``) the one
registered first wins, regardless of which is more specific.
"""

import logging

from switchyard._internal.types import Handler
from switchyard.routing.matcher import match_pattern, parse_pattern
from switchyard.routing.route import Pattern, RouteMatch

logger = logging.getLogger("switchyard.routing")


class Router:
    """Route table mapping canonical patterns to ordered handler lists.

    Usage::

        router = Router()
        router.add("GET", "/users/:id", load_user, show_user)
        router.compile()
        match = router.match("/users/42/GET")
        match.params  # {"id": "42"}

    Lookup is O(number of patterns) per request. Tables in the tens or
    low hundreds of routes are the intended scale.
    """

    __slots__ = ("_compiled", "_entries")

    def __init__(self) -> None:
        # canonical source -> (pattern, handlers); dicts keep insertion order
        self._entries: dict[str, tuple[Pattern, list[Handler]]] = {}
        self._compiled = False

    def add(self, method: str, path: str, *handlers: Handler) -> Pattern:
        """Append handlers to the entry for ``(method, path)``.

        Re-registering the same method and path extends the existing
        handler list instead of replacing it. Must be called before
        ``compile()``.
        """
        if self._compiled:
            msg = "Cannot add routes after compilation."
            raise RuntimeError(msg)

        pattern = parse_pattern(path, method)
        entry = self._entries.get(pattern.source)
        if entry is None:
            self._entries[pattern.source] = (pattern, list(handlers))
            logger.debug("Registered %s %s (%d handlers)", pattern.method, path, len(handlers))
            return pattern

        entry[1].extend(handlers)
        logger.debug("Appended %d handlers to %s %s", len(handlers), pattern.method, path)
        return entry[0]

    def compile(self) -> None:
        """Freeze the router. No more routes can be added."""
        self._compiled = True

    @property
    def compiled(self) -> bool:
        return self._compiled

    @property
    def routes(self) -> list[Pattern]:
        """All registered patterns, in registration order."""
        return [pattern for pattern, _ in self._entries.values()]

    def __len__(self) -> int:
        return len(self._entries)

    def handlers(self, pattern: Pattern) -> tuple[Handler, ...]:
        """Return the handlers registered for *pattern*, in order."""
        return tuple(self._entries[pattern.source][1])

    def match(self, key: str) -> RouteMatch | None:
        """Return the first pattern accepting the canonical *key*, with its params.

        Raises ``MalformedURL`` if the winning pattern captures a segment
        with invalid percent-encoding.
        """
        for pattern, _ in self._entries.values():
            params = match_pattern(pattern, key)
            if params is not None:
                return RouteMatch(pattern=pattern, params=params)
        return None

    def find(self, key: str) -> Pattern | None:
        """Return the first matching pattern, or ``None``."""
        match = self.match(key)
        return match.pattern if match is not None else None

    def params(self, key: str) -> dict[str, str]:
        """Return the path params for *key*, or an empty dict on no match."""
        match = self.match(key)
        return dict(match.params) if match is not None else {}
