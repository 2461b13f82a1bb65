"""PathSegment, Pattern and RouteMatch frozen dataclasses."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PathSegment:
    """One ``/``-separated piece of a canonical pattern.

    Literal:      ``users``  (param_name=None)
    Placeholder:  ``:id``    (param_name="id")
    """

    value: str
    param_name: str | None = None

    @property
    def is_param(self) -> bool:
        return self.param_name is not None


@dataclass(frozen=True, slots=True)
class Pattern:
    """A registered route template in canonical ``/path/METHOD`` form.

    ``source`` is the route-table key: ``/items/:id`` registered for GET
    becomes ``/items/:id/GET``, and ``/`` becomes ``//GET``. The trailing
    method token is an ordinary literal segment.
    """

    source: str
    path: str
    method: str
    segments: tuple[PathSegment, ...]

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.param_name for s in self.segments if s.param_name is not None)


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful match: the winning pattern and decoded params."""

    pattern: Pattern
    params: dict[str, str]
