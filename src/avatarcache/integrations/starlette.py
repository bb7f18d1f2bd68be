"""Starlette endpoint serving avatars through an AvatarPipeline."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from pathlib import Path

from starlette.requests import Request
from starlette.responses import FileResponse, PlainTextResponse, Response

from avatarcache.pipeline.engine import AvatarPipeline

logger = logging.getLogger(__name__)

_MEDIA_TYPE = "image/png"


class StarletteResponder:
    """Collects the response the pipeline decides on."""

    def __init__(self) -> None:
        self.response: Response | None = None

    def send_file(self, path: Path) -> None:
        self.response = FileResponse(path, media_type=_MEDIA_TYPE)

    def send_error(self, status_code: int, detail: str) -> None:
        self.response = PlainTextResponse(detail, status_code=status_code)


def avatar_endpoint(pipeline: AvatarPipeline) -> Callable[[Request], Awaitable[Response]]:
    """Wrap ``pipeline`` as a Starlette request handler.

    Usage::

        app = Starlette(routes=[Route("/avatar", avatar_endpoint(pipeline))])

    With the default ``entity`` path the subject is read from
    ``request.state.user``, typically set by authentication middleware.
    """

    async def endpoint(request: Request) -> Response:
        responder = StarletteResponder()
        await pipeline.handle(request, responder)
        if responder.response is None:
            # A custom error handler that did not answer
            logger.warning("No avatar response produced for %s", request.url.path)
            return PlainTextResponse("Avatar unavailable", status_code=500)
        return responder.response

    return endpoint
