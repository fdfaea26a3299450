"""
Unit Tests for the Layered Test Configuration

This module contains tests for defaults, JSON file overrides, .env files and
environment variable overrides of TestConfiguration.
"""

import json
import pytest
import httpx
from pydantic import ValidationError
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from tcc_api.config.settings import TestConfiguration, TestSettings, flatten


@pytest.fixture
def settings_file(config_env, tmp_path):
    path = tmp_path / "appsettings.test.json"
    path.write_text(json.dumps({
        "TestSettings": {
            "ApiBaseUrl": "http://qa.example.com",
            "RetryAttempts": 5,
            "ValidCredentials": {"Username": "qa_admin"},
        }
    }), encoding="utf-8")
    config_env.setenv("TCC_SETTINGS_FILE", str(path))
    return str(path)


def load(**kwargs):
    return TestConfiguration(_env_file=None, **kwargs)


def load_with_env_file(env_file):
    return TestConfiguration(_env_file=str(env_file))


class TestDefaults:
    """Tests for the built-in defaults."""

    def test_default_values(self, config_env):
        config = load()

        assert config.api_base_url == "http://localhost:5214"
        assert config.auth_endpoint == "/api/auth/token"
        assert config.account_endpoint == "/api/account/create"
        assert config.default_timeout == 30000
        assert config.retry_attempts == 3
        assert config.valid_username == "TCCTest"
        assert config.valid_password == "Test!456"

    def test_get_full_api_url(self, config_env):
        assert load().get_full_api_url() == "http://localhost:5214/api/auth/token"

    def test_get_section_path(self, config_env):
        config = load()

        assert config.get("TestSettings:ApiBaseUrl") == "http://localhost:5214"
        assert config.get("TestSettings:ValidCredentials:Username") == "TCCTest"

    def test_get_unknown_key(self, config_env):
        config = load()

        assert config.get("Nope:Missing") is None
        assert config.get("Nope:Missing", "fallback") == "fallback"


class TestOverrides:
    """Tests for the JSON file, .env and environment layers."""

    def test_json_file_overrides_defaults(self, settings_file):
        config = load()

        assert config.api_base_url == "http://qa.example.com"
        assert config.retry_attempts == 5
        assert config.valid_username == "qa_admin"
        # untouched keys keep their defaults
        assert config.valid_password == "Test!456"

    def test_environment_overrides_json_file(self, settings_file, config_env):
        config_env.setenv("TestSettings__ApiBaseUrl", "http://env.example.com")
        config_env.setenv("TestSettings__ValidCredentials__Password", "fromenv")

        config = load()

        assert config.api_base_url == "http://env.example.com"
        assert config.valid_password == "fromenv"
        assert config.valid_username == "qa_admin"

    def test_environment_keys_match_case_insensitively(self, config_env):
        config_env.setenv("TESTSETTINGS__APIBASEURL", "http://x:1")
        config_env.setenv("testsettings__validcredentials__username", "lower_admin")

        config = load()

        assert config.api_base_url == "http://x:1"
        assert config.valid_username == "lower_admin"

    def test_dotenv_file_overrides_json_file(self, settings_file, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TestSettings__RetryAttempts=7\n", encoding="utf-8")

        config = load_with_env_file(env_file)

        assert config.retry_attempts == 7
        assert config.api_base_url == "http://qa.example.com"

    def test_environment_overrides_dotenv_file(self, config_env, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("TestSettings__RetryAttempts=7\n", encoding="utf-8")
        config_env.setenv("TestSettings__RetryAttempts", "1")

        assert load_with_env_file(env_file).retry_attempts == 1

    def test_plain_environment_keys_ignored(self, config_env):
        config_env.setenv("ApiBaseUrl", "http://ignored")
        assert load().api_base_url == "http://localhost:5214"

    def test_invalid_number_rejected(self, config_env):
        config_env.setenv("TestSettings__DefaultTimeout", "soon")
        with pytest.raises(ValidationError):
            load()


class TestSections:
    """Tests for the section models on their own."""

    def test_section_keys_match_case_insensitively(self):
        settings = TestSettings.model_validate({"apibaseurl": "http://a", "VALIDCREDENTIALS": {"password": "p"}})

        assert settings.api_base_url == "http://a"
        assert settings.valid_credentials.password == "p"
        assert settings.valid_credentials.username == "TCCTest"

    def test_later_partial_section_merges(self):
        settings = TestSettings.model_validate({
            "ValidCredentials": {"Username": "first"},
            "validcredentials": {"password": "second"},
        })

        assert settings.valid_credentials.username == "first"
        assert settings.valid_credentials.password == "second"


class TestHttpClientFactory:
    """Tests for create_http_client."""

    def test_client_uses_base_url_and_timeout(self, config_env):
        config_env.setenv("TestSettings__DefaultTimeout", "2500")

        with load().create_http_client() as client:
            assert isinstance(client, httpx.Client)
            assert str(client.base_url).rstrip("/") == "http://localhost:5214"
            assert client.timeout.read == 2.5


def test_flatten_nested_dict():
    assert flatten({"A": {"B": {"C": 1}, "D": "x"}}) == {"A:B:C": 1, "A:D": "x"}
