"""Shared test fixtures for ALFReD."""

from collections.abc import Generator

import pytest
from pydantic import SecretStr

from alfred.settings import Settings, get_settings


# =============================================================================
# SETTINGS
# =============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Provide test settings with safe defaults and every tool configured."""
    return Settings(
        _env_file=None,
        environment="testing",
        debug=True,
        llm_api_key=SecretStr("test-api-key"),
        federal_register_base_url="https://fr.test/api/v1",
        fred_base_url="https://fred.test/fred",
        fred_api_key=SecretStr("test-fred-key"),
        google_api_key=SecretStr("test-google-key"),
        google_cse_id="test-cx",
        google_cse_base_url="https://cse.test/customsearch/v1",
        mlflow_traces_enabled=False,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> Generator[None, None, None]:
    """Keep the cached settings from leaking between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
