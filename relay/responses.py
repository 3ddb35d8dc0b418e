"""Turn handler outcomes into HTTP responses.

Every route returns through ``normalize`` so all bodies share one shape:
the domain object on success, ``{"error": message}`` otherwise.
"""

from __future__ import annotations

import logging

from fastapi.responses import JSONResponse, PlainTextResponse, Response
from pydantic import BaseModel

from relay.errors import RelayError
from relay.models.common import ErrorResponse
from relay.models.auth import (
    ConfirmationResult,
    SessionResult,
    SignUpOutcome,
    TokenAbsent,
    TokenRejected,
    UserFound,
)

logger = logging.getLogger(__name__)

UNAUTHORIZED = "Unauthorized"


def error_response(message: str, status: int) -> Response:
    """``{"error": message}`` at ``status``, or plain text if that can't be built."""
    if not 100 <= status <= 599:
        logger.error("Invalid status %s for error response: %s", status, message)
        return PlainTextResponse(message, status_code=500)
    try:
        return JSONResponse(ErrorResponse(error=message).model_dump(), status_code=status)
    except (TypeError, ValueError):
        logger.exception("Could not encode error response")
        return PlainTextResponse(str(message), status_code=status)


def sign_up_body(outcome: SignUpOutcome) -> BaseModel:
    """Pick the response schema for a sign-up by its variant."""
    if isinstance(outcome, SessionResult):
        return outcome.session.user
    if isinstance(outcome, ConfirmationResult):
        return outcome.confirmation
    raise TypeError(f"Unknown sign-up outcome: {type(outcome).__name__}")


def normalize(outcome: object, error_status: int | None = None) -> Response:
    """Map a handler outcome to ``(status, JSON body)``.

    Args:
        outcome: A pydantic model or dict on success, a ``RelayError``, a
            ``UserFound`` / ``SessionResult`` / ``ConfirmationResult`` wrapper,
            or ``TokenAbsent`` / ``TokenRejected``.
        error_status: Status for ``RelayError`` outcomes. ``None`` uses the
            error's own status code.
    """
    if isinstance(outcome, (TokenAbsent, TokenRejected)):
        return error_response(UNAUTHORIZED, 401)
    if isinstance(outcome, RelayError):
        status = error_status or outcome.status_code or 500
        return error_response(outcome.message, status)
    if isinstance(outcome, UserFound):
        outcome = outcome.user
    elif isinstance(outcome, (SessionResult, ConfirmationResult)):
        outcome = sign_up_body(outcome)

    if isinstance(outcome, BaseModel):
        content = outcome.model_dump(mode="json")
    else:
        content = outcome
    try:
        return JSONResponse(content, status_code=200)
    except (TypeError, ValueError):
        logger.exception("Could not encode response body")
        return PlainTextResponse("Internal Server Error", status_code=500)
