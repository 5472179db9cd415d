"""Exception types and handlers for the HTTP boundary.

Handlers are registered while the app is built, before the middleware
stack is assembled.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bearingbot.core.models.context import utcnow

from .models import ErrorResponse

logger = logging.getLogger(__name__)

PROCESSING_ERROR_MESSAGE = (
    "An error occurred while processing your bearing product query. "
    "Please try again."
)


class InvalidChatRequest(Exception):
    """The request is structurally invalid (e.g. a blank message)."""


class ChatProcessingError(Exception):
    """A turn failed outside the pipeline's own fallbacks."""


def _error(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(error=message, timestamp=utcnow())
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def register_exception_handlers(app: FastAPI) -> None:
    """Register custom exception handlers on ``app``."""

    @app.exception_handler(InvalidChatRequest)
    async def handle_invalid_request(
        request: Request, exc: InvalidChatRequest
    ) -> JSONResponse:
        return _error(400, str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        fields = ", ".join(
            ".".join(str(p) for p in err.get("loc", ())) for err in exc.errors()
        )
        return _error(400, f"Invalid request: {fields}")

    @app.exception_handler(ChatProcessingError)
    async def handle_processing_error(
        request: Request, exc: ChatProcessingError
    ) -> JSONResponse:
        return _error(500, PROCESSING_ERROR_MESSAGE)
