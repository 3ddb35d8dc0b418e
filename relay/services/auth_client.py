"""Supabase Auth adapter: login, sign-up and user lookup over the GoTrue REST API."""

from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from relay.config import SUPABASE_API_KEY, SUPABASE_JWT_SECRET, SUPABASE_URL, SecretProvider
from relay.errors import ExternalServiceError
from relay.models.auth import (
    ConfirmationResult,
    PendingConfirmation,
    Session,
    SessionResult,
    SignUpOutcome,
    TokenAbsent,
    TokenRejected,
    User,
    UserFound,
    UserLookup,
)

logger = logging.getLogger(__name__)

_ERROR_KEYS = ("error_description", "msg", "message", "error")


def _error_message(resp: httpx.Response) -> str:
    """Pull the human-readable message out of a GoTrue error body."""
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for key in _ERROR_KEYS:
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return f"Auth service error: {resp.status_code}"


def _bearer_token(authorization: str | None) -> str | None:
    if authorization is None:
        return None
    token = authorization.strip()
    scheme, _, value = token.partition(" ")
    if scheme.lower() == "bearer":
        token = value.strip()
    return token or None


class AuthClient:
    """Thin async client for a Supabase project's auth endpoints."""

    def __init__(self, project_url: str, api_key: str, jwt_secret: str, http: httpx.AsyncClient):
        self.base_url = f"{project_url.rstrip('/')}/auth/v1"
        self.api_key = api_key
        self.jwt_secret = jwt_secret
        self._http = http

    @classmethod
    def from_secrets(cls, secrets: SecretProvider, http: httpx.AsyncClient) -> AuthClient:
        """Build a client, failing before any network call if a secret is missing."""
        return cls(
            project_url=secrets.get(SUPABASE_URL),
            api_key=secrets.get(SUPABASE_API_KEY),
            jwt_secret=secrets.get(SUPABASE_JWT_SECRET),
            http=http,
        )

    def _headers(self, access_token: str | None = None) -> dict[str, str]:
        headers = {"apikey": self.api_key, "Content-Type": "application/json"}
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"
        return headers

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            return await self._http.request(method, f"{self.base_url}{path}", **kwargs)
        except httpx.RequestError as e:
            logger.error("Auth service request failed: %s", e)
            raise ExternalServiceError(f"Auth service request failed: {e}") from e

    async def login(self, email: str, password: str) -> Session:
        """Exchange email + password for a session.

        Raises:
            ExternalServiceError: The auth service refused the credentials or
                could not be reached.
        """
        resp = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        if not resp.is_success:
            raise ExternalServiceError(_error_message(resp), status_code=resp.status_code)
        try:
            return Session.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise ExternalServiceError(f"Unexpected login response: {e}") from e

    async def register(self, email: str, password: str) -> SignUpOutcome:
        """Create an account.

        Returns ``SessionResult`` when the project auto-confirms new users and
        ``ConfirmationResult`` when a confirmation email was sent instead.

        Raises:
            ExternalServiceError: Sign-up was refused or the service failed.
                ``status_code`` carries the auth service's status when it
                answered.
        """
        resp = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password},
            headers=self._headers(),
        )
        if not resp.is_success:
            raise ExternalServiceError(_error_message(resp), status_code=resp.status_code)
        try:
            data = resp.json()
            if isinstance(data, dict) and "access_token" in data:
                return SessionResult(Session.model_validate(data))
            return ConfirmationResult(PendingConfirmation.model_validate(data))
        except (ValueError, ValidationError) as e:
            raise ExternalServiceError(f"Unexpected sign-up response: {e}") from e

    async def fetch_user(self, authorization: str | None) -> UserLookup:
        """Resolve the user behind an Authorization header value.

        No header is ``TokenAbsent`` and never touches the network. A header
        with no token in it, or a token the auth service refuses, is
        ``TokenRejected``.
        """
        if authorization is None:
            return TokenAbsent()
        token = _bearer_token(authorization)
        if token is None:
            return TokenRejected("Empty bearer token")

        try:
            resp = await self._request("GET", "/user", headers=self._headers(token))
        except ExternalServiceError as e:
            return TokenRejected(e.message)
        if not resp.is_success:
            return TokenRejected(_error_message(resp))
        try:
            return UserFound(User.model_validate(resp.json()))
        except (ValueError, ValidationError) as e:
            return TokenRejected(f"Unexpected user response: {e}")
