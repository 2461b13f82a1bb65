"""Routing — canonical path matching over an insertion-ordered route table.

Patterns are registered during setup and frozen when the app starts
serving. The first pattern in registration order that accepts a
request's canonical key wins.
"""

from switchyard.routing.matcher import canonicalize, match_pattern, parse_pattern
from switchyard.routing.route import PathSegment, Pattern, RouteMatch
from switchyard.routing.router import Router

__all__ = [
    "PathSegment",
    "Pattern",
    "RouteMatch",
    "Router",
    "canonicalize",
    "match_pattern",
    "parse_pattern",
]
