"""Request dispatch — route lookup plus pipeline execution.

The dispatcher is transport-agnostic: it takes an already-built Request
and Response and fills the Response in. Handler exceptions are not
caught here; the ASGI handler in ``switchyard.server`` owns that.
"""

import logging

from switchyard.errors import MalformedURL
from switchyard.http.request import Request
from switchyard.http.response import Response
from switchyard.middleware.builtin import ParamsDecorator, decorate_query
from switchyard.pipeline import Pipeline, PipelineState
from switchyard.routing.matcher import canonicalize
from switchyard.routing.router import Router

logger = logging.getLogger("switchyard.server")


class Dispatcher:
    """Resolve each request against a Router and run its pipeline.

    Usage::

        dispatcher = Dispatcher(router)
        state = await dispatcher.dispatch(request, response)
    """

    __slots__ = ("_params_decorator", "bad_request_body", "not_found_body", "router")

    def __init__(
        self,
        router: Router,
        *,
        not_found_body: str = "Not Found",
        bad_request_body: str = "Bad Request",
    ) -> None:
        self.router = router
        self.not_found_body = not_found_body
        self.bad_request_body = bad_request_body
        self._params_decorator = ParamsDecorator(router)

    async def dispatch(self, request: Request, response: Response) -> PipelineState | None:
        """Handle one request.

        Returns the final pipeline state, or ``None`` when no pipeline
        ran (no route matched, or the URL could not be decoded).
        """
        key = canonicalize(request.url, request.method)
        try:
            pattern = self.router.find(key)
        except MalformedURL as exc:
            logger.debug("400 %s %s — %s", request.method, request.url, exc.detail)
            response.send(self.bad_request_body, status=400)
            return None

        if pattern is None:
            logger.debug("404 %s %s", request.method, request.url)
            response.send(self.not_found_body, status=404)
            return None

        pipeline = Pipeline(
            (decorate_query, self._params_decorator, *self.router.handlers(pattern))
        )
        state = await pipeline.run(request, response)
        if state is PipelineState.SHORT_CIRCUITED:
            logger.debug(
                "%s %s stopped at handler %d of %d",
                request.method,
                request.url,
                pipeline.index + 1,
                len(pipeline.handlers),
            )
        return state
