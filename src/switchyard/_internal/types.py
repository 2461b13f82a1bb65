"""Shared type aliases used across switchyard modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Pipeline handler — (request, response, next), sync or async
Handler: TypeAlias = Callable[..., Any]
