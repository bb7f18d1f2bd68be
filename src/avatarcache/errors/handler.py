"""Built-in error handler used when none is configured."""

from __future__ import annotations

import logging
from typing import Any

from avatarcache.errors.exceptions import (
    ConfigurationError,
    ResolutionExhaustedError,
    TransportError,
)
from avatarcache.host import ErrorResponder

logger = logging.getLogger(__name__)


def default_error_handler(error: Exception, request: Any, response: Any) -> Any:
    """Log the failure and answer with 404 (no avatar) or 500 (anything else).

    The status is only written when the response object offers
    ``send_error(status_code, detail)``; its return value is passed back so
    an async ``send_error`` can be awaited by the caller.
    """
    if isinstance(error, ResolutionExhaustedError):
        status_code, detail = 404, "No avatar available"
        logger.info("Avatar not resolved: %s", error)
    elif isinstance(error, ConfigurationError):
        status_code, detail = 500, "Avatar service misconfigured"
        logger.error("Avatar configuration error: %s", error)
    elif isinstance(error, TransportError):
        status_code, detail = 500, "Avatar unavailable"
        logger.warning("Avatar fetch failed (%s): %s", error.url, error)
    else:
        status_code, detail = 500, "Avatar unavailable"
        logger.error("Avatar pipeline failed: %s", error, exc_info=error)

    if isinstance(response, ErrorResponder):
        return response.send_error(status_code, detail)
    return None
