"""Sequential handler pipeline driven by explicit continuations.

Each handler receives ``(request, response, next)``. Calling ``next()``
lets the pipeline move on to the following handler once the current one
returns; returning without calling it ends the run early. The runner is
a plain index loop, so pipeline length never affects stack depth.
"""

import enum
from collections.abc import Sequence
from dataclasses import dataclass

from switchyard._internal.invoke import invoke
from switchyard._internal.types import Handler
from switchyard.http.request import Request
from switchyard.http.response import Response


class PipelineState(enum.Enum):
    RUNNING = "running"
    SHORT_CIRCUITED = "short_circuited"
    COMPLETED = "completed"


class Next:
    """Continuation for a single pipeline step.

    A fresh instance is handed to every handler. Calling it more than
    once has the same effect as calling it once.
    """

    __slots__ = ("_called",)

    def __init__(self) -> None:
        self._called = False

    def __call__(self) -> None:
        self._called = True

    @property
    def called(self) -> bool:
        return self._called

    def __repr__(self) -> str:
        return f"<Next called={self._called}>"


@dataclass(slots=True)
class Pipeline:
    """The ordered handlers for one request, plus where the run stands.

    ``index`` points at the active handler while running, and at the
    handler that stopped the run after a short-circuit.
    """

    handlers: Sequence[Handler]
    index: int = 0
    state: PipelineState = PipelineState.RUNNING

    async def run(self, request: Request, response: Response) -> PipelineState:
        """Run handlers in order until one skips ``next()`` or all are done.

        Exceptions raised by a handler propagate unchanged and leave the
        state at ``RUNNING``.
        """
        while self.index < len(self.handlers):
            advance = Next()
            await invoke(self.handlers[self.index], request, response, advance)
            if not advance.called:
                self.state = PipelineState.SHORT_CIRCUITED
                return self.state
            self.index += 1

        self.state = PipelineState.COMPLETED
        return self.state
