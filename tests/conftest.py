"""Shared test fixtures for the link relay."""

from __future__ import annotations

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from relay.config import MappingSecretProvider

SUPABASE_URL = "https://project.supabase.co"
DISCORD_MESSAGES_PATH = "/api/v10/channels/{channel_id}/messages"

SECRETS = {
    "SUPABASE_URL": SUPABASE_URL,
    "SUPABASE_API_KEY": "anon-key",
    "SUPABASE_JWT_SECRET": "jwt-secret",
    "DISCORD_TOKEN": "bot-token",
}

USER = {
    "id": "8d0fd2b3-9ca7-4d9e-a95f-9e13dded323e",
    "aud": "authenticated",
    "role": "authenticated",
    "email": "alice@example.com",
    "phone": "",
    "email_confirmed_at": "2026-01-01T00:00:00Z",
    "confirmed_at": "2026-01-01T00:00:00Z",
    "last_sign_in_at": "2026-01-02T00:00:00Z",
    "app_metadata": {"provider": "email", "providers": ["email"]},
    "user_metadata": {},
    "identities": [],
    "is_anonymous": False,
    "created_at": "2026-01-01T00:00:00Z",
    "updated_at": "2026-01-02T00:00:00Z",
}

SESSION = {
    "access_token": "access-token-value",
    "refresh_token": "refresh-token-value",
    "expires_in": 3600,
    "expires_at": 1767322800,
    "token_type": "bearer",
    "user": USER,
}

PENDING_CONFIRMATION = {
    "id": "2f0a4c1e-5b7e-4a55-8f0e-1c3b2f1a9d77",
    "aud": "authenticated",
    "role": "",
    "email": "bob@example.com",
    "confirmation_sent_at": "2026-01-01T00:00:00Z",
    "is_anonymous": False,
    "app_metadata": {},
    "user_metadata": {},
    "identities": [],
    "created_at": "2026-01-01T00:00:00Z",
    "updated_at": "2026-01-01T00:00:00Z",
}


class ExternalStub:
    """Stands in for Supabase and Discord behind an httpx mock transport.

    Routes are keyed by (method, path); unrouted requests get a 404.
    Every request is recorded in ``calls``.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], tuple[int, dict | None]] = {}
        self.calls: list[httpx.Request] = []
        self.error: Exception | None = None

    def on(self, method: str, path: str, status: int = 200, json: dict | None = None) -> None:
        self.routes[(method, path)] = (status, json)

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.error is not None:
            raise self.error
        status, body = self.routes.get(
            (request.method, request.url.path), (404, {"msg": "not stubbed"})
        )
        return httpx.Response(status, json=body)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def external() -> ExternalStub:
    return ExternalStub()


@pytest.fixture
def secrets() -> dict[str, str]:
    """Secret values served to the app; tests may delete keys."""
    return dict(SECRETS)


# ---------------------------------------------------------------------------
# App / client fixtures
# ---------------------------------------------------------------------------

@pytest_asyncio.fixture
async def app(external, secrets):
    """FastAPI app with secrets and outbound HTTP replaced by stubs."""
    from relay.api.deps import get_http_client
    from relay.config import get_secrets
    from relay.main import app as fastapi_app

    async def _http_client():
        async with external.client() as http:
            yield http

    fastapi_app.dependency_overrides[get_secrets] = lambda: MappingSecretProvider(secrets)
    fastapi_app.dependency_overrides[get_http_client] = _http_client

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    """Async HTTP client for testing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
