"""Host response interface — what the pipeline needs from a web framework."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Responder(Protocol):
    """The host response object.

    ``send_file`` may return an awaitable; the pipeline awaits it.
    """

    def send_file(self, path: Path) -> Any: ...


@runtime_checkable
class ErrorResponder(Responder, Protocol):
    """A responder the built-in error handler can write a status to."""

    def send_error(self, status_code: int, detail: str) -> Any: ...
