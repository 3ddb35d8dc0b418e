from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, ConfigDict


class Credentials(BaseModel):
    email: str
    password: str


class User(BaseModel):
    """User record as reported by the auth service."""
    model_config = ConfigDict(extra="allow")

    id: str
    aud: str | None = None
    role: str | None = None
    email: str | None = None
    phone: str | None = None
    email_confirmed_at: str | None = None
    confirmed_at: str | None = None
    last_sign_in_at: str | None = None
    app_metadata: dict = {}
    user_metadata: dict = {}
    is_anonymous: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


class LoginUser(BaseModel):
    """User subset embedded in the login response."""
    id: str
    email: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    last_sign_in_at: str | None = None
    email_confirmed_at: str | None = None


class Session(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int
    expires_at: int | None = None
    token_type: str
    user: User


class LoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    expires_in: int
    expires_at: int | None = None
    token_type: str
    user: LoginUser

    @classmethod
    def from_session(cls, session: Session) -> LoginResponse:
        return cls(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            expires_in=session.expires_in,
            expires_at=session.expires_at,
            token_type=session.token_type,
            user=LoginUser(**session.user.model_dump(include=set(LoginUser.model_fields))),
        )


class PendingConfirmation(BaseModel):
    """Sign-up accepted, waiting for the user to confirm their email."""
    id: str
    aud: str | None = None
    role: str | None = None
    confirmation_sent_at: str | None = None
    is_anonymous: bool | None = None
    created_at: str | None = None
    updated_at: str | None = None


# Sign-up outcome: exactly one of these two.


@dataclass(frozen=True)
class SessionResult:
    session: Session


@dataclass(frozen=True)
class ConfirmationResult:
    confirmation: PendingConfirmation


SignUpOutcome = SessionResult | ConfirmationResult


# User lookup outcome: found, no token supplied, or token refused.


@dataclass(frozen=True)
class UserFound:
    user: User


@dataclass(frozen=True)
class TokenAbsent:
    pass


@dataclass(frozen=True)
class TokenRejected:
    message: str


Unauthenticated = TokenAbsent | TokenRejected
UserLookup = UserFound | TokenAbsent | TokenRejected
