from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from pydantic_settings import BaseSettings

from relay.errors import ConfigurationMissingError

SUPABASE_URL = "SUPABASE_URL"
SUPABASE_API_KEY = "SUPABASE_API_KEY"
SUPABASE_JWT_SECRET = "SUPABASE_JWT_SECRET"
DISCORD_TOKEN = "DISCORD_TOKEN"


class Settings(BaseSettings):
    # Supabase Auth
    supabase_url: str = ""
    supabase_api_key: str = ""
    supabase_jwt_secret: str = ""

    # Discord
    discord_token: str = ""
    discord_api_base: str = "https://discord.com/api/v10"

    # Logging
    log_level: str = "info"

    # CORS
    cors_origins: str = "*"

    # Deployment mode: "container" (default) or "lambda"
    deployment_mode: str = "container"

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()


@runtime_checkable
class SecretProvider(Protocol):
    """Interface for looking up runtime secrets by name."""

    def get(self, name: str) -> str: ...


class SettingsSecretProvider:
    """Reads secrets from the environment-backed Settings object."""

    _fields = {
        SUPABASE_URL: "supabase_url",
        SUPABASE_API_KEY: "supabase_api_key",
        SUPABASE_JWT_SECRET: "supabase_jwt_secret",
        DISCORD_TOKEN: "discord_token",
    }

    def __init__(self, source: Settings | None = None) -> None:
        self._settings = source or settings

    def get(self, name: str) -> str:
        field = self._fields.get(name)
        value = getattr(self._settings, field, "") if field else ""
        if not value:
            raise ConfigurationMissingError(name)
        return value


class MappingSecretProvider:
    """Plain dict lookup, for tests and embedding."""

    def __init__(self, values: Mapping[str, str]) -> None:
        self._values = dict(values)

    def get(self, name: str) -> str:
        value = self._values.get(name)
        if not value:
            raise ConfigurationMissingError(name)
        return value


def get_secrets() -> SecretProvider:
    """FastAPI dependency: the secret provider for the current deployment."""
    return SettingsSecretProvider()
