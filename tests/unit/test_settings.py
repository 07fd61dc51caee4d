"""Unit tests for application settings."""

import pydantic
import pytest

from alfred.settings import Settings, get_settings


class TestSettings:
    def test_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.federal_register_base_url == "https://www.federalregister.gov/api/v1"
        assert settings.fred_base_url == "https://api.stlouisfed.org/fred"
        assert settings.adapter_timeout_seconds == 30.0
        assert settings.record_failure_notes is False
        assert settings.mlflow_traces_enabled is False

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("FRED_API_KEY", "from-env")
        monkeypatch.setenv("GOOGLE_CSE_CX", "cx-from-env")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-env")

        settings = Settings(_env_file=None)

        assert settings.fred_api_key.get_secret_value() == "from-env"
        assert settings.google_cse_id == "cx-from-env"
        assert settings.llm_api_key.get_secret_value() == "sk-env"

    def test_secrets_hidden_in_repr(self, test_settings):
        assert "test-fred-key" not in repr(test_settings)

    def test_timeout_must_be_positive(self):
        with pytest.raises(pydantic.ValidationError):
            Settings(_env_file=None, adapter_timeout_seconds=0)

    def test_get_settings_is_cached(self):
        assert get_settings() is get_settings()
