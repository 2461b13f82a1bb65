"""Query string decoding for the built-in query decorator.

The contract is deliberately small: split on ``&``, split each piece on
its first ``=``, percent-decode both sides. There is no ``+``-to-space
translation and no multi-value support; a repeated key keeps its last
value.
"""

from switchyard.routing.matcher import decode_component


def parse_query(query_string: str) -> dict[str, str]:
    """Decode a raw query string into a key -> value mapping.

    ``"a=1&b=2"`` -> ``{"a": "1", "b": "2"}``; ``"flag"`` ->
    ``{"flag": ""}``; ``""`` -> ``{}``.

    Raises ``MalformedURL`` when a key or value has invalid
    percent-encoding.
    """
    if not query_string:
        return {}
    query: dict[str, str] = {}
    for piece in query_string.split("&"):
        key, _, value = piece.partition("=")
        query[decode_component(key)] = decode_component(value)
    return query
