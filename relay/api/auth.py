"""Auth routes: proxy login, sign-up and current-user lookup to Supabase."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Header
from fastapi.responses import Response

from relay.api.deps import get_auth_client
from relay.errors import ExternalServiceError
from relay.models.common import ErrorResponse
from relay.models.auth import Credentials, LoginResponse, TokenAbsent, TokenRejected
from relay.responses import normalize
from relay.services.auth_client import AuthClient

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["auth"])


def register_error_status(error: ExternalServiceError) -> int:
    """Refusals the auth service blames on the request (weak password,
    existing account) are 400; everything else is 500."""
    if error.status_code is not None and 400 <= error.status_code < 500:
        return 400
    return 500


@router.post("/login", responses={400: {"model": ErrorResponse}})
async def login(body: Credentials, auth: AuthClient = Depends(get_auth_client)) -> Response:
    try:
        session = await auth.login(body.email, body.password)
    except ExternalServiceError as e:
        logger.info("Login refused: %s", e.message)
        return normalize(e, 400)
    return normalize(LoginResponse.from_session(session))


@router.post("/register", responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
async def register(body: Credentials, auth: AuthClient = Depends(get_auth_client)) -> Response:
    try:
        outcome = await auth.register(body.email, body.password)
    except ExternalServiceError as e:
        status = register_error_status(e)
        logger.log(logging.ERROR if status >= 500 else logging.INFO, "Sign-up failed: %s", e.message)
        return normalize(e, status)
    return normalize(outcome)


@router.get("/me", responses={401: {"model": ErrorResponse}})
async def me(
    authorization: str | None = Header(default=None),
    auth: AuthClient = Depends(get_auth_client),
) -> Response:
    lookup = await auth.fetch_user(authorization)
    if isinstance(lookup, TokenAbsent):
        logger.debug("No Authorization header on /api/me")
    elif isinstance(lookup, TokenRejected):
        logger.warning("Token rejected: %s", lookup.message)
    return normalize(lookup)
