"""Tests for settings and secret lookup."""

from __future__ import annotations

import pytest

from relay.config import (
    MappingSecretProvider,
    SecretProvider,
    Settings,
    SettingsSecretProvider,
)
from relay.errors import ConfigurationMissingError


class TestSettings:
    def test_cors_origin_list(self):
        s = Settings(cors_origins="https://a.example, https://b.example,,")
        assert s.cors_origin_list == ["https://a.example", "https://b.example"]

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("DISCORD_TOKEN", "from-env")
        assert Settings().discord_token == "from-env"


class TestSettingsSecretProvider:
    def test_lookup_by_name(self):
        provider = SettingsSecretProvider(Settings(supabase_url="https://x.supabase.co", discord_token="t"))
        assert provider.get("SUPABASE_URL") == "https://x.supabase.co"
        assert provider.get("DISCORD_TOKEN") == "t"

    def test_empty_value_is_missing(self):
        provider = SettingsSecretProvider(Settings(supabase_api_key=""))
        with pytest.raises(ConfigurationMissingError) as exc:
            provider.get("SUPABASE_API_KEY")
        assert exc.value.name == "SUPABASE_API_KEY"

    def test_unknown_name_is_missing(self):
        with pytest.raises(ConfigurationMissingError):
            SettingsSecretProvider(Settings()).get("NOT_A_SECRET")

    def test_is_secret_provider(self):
        assert isinstance(SettingsSecretProvider(Settings()), SecretProvider)


class TestMappingSecretProvider:
    def test_lookup(self):
        assert MappingSecretProvider({"DISCORD_TOKEN": "t"}).get("DISCORD_TOKEN") == "t"

    def test_missing(self):
        with pytest.raises(ConfigurationMissingError, match="Missing configuration: DISCORD_TOKEN"):
            MappingSecretProvider({}).get("DISCORD_TOKEN")
