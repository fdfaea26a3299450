"""
Layered test configuration.

Values are resolved from, lowest to highest precedence:
field defaults, the JSON settings file, a .env file and the process
environment. Environment keys use the ``Section__Key`` convention and are
matched case-insensitively, so ``TESTSETTINGS__VALIDCREDENTIALS__USERNAME``
overrides ``{"TestSettings": {"ValidCredentials": {"Username": ...}}}``.

The JSON file defaults to ``appsettings.test.json`` and can be moved with
``TCC_SETTINGS_FILE``.
"""
import os
from typing import Any, Dict, Tuple, Type
import httpx
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

SETTINGS_FILE = "appsettings.test.json"
SETTINGS_FILE_ENV = "TCC_SETTINGS_FILE"


class config_section(BaseModel):
    """Section of the settings tree whose keys match case-insensitively."""

    model_config = ConfigDict(populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def _match_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        lookup = {}
        for name, field in cls.model_fields.items():
            key = field.alias or name
            lookup[name.lower()] = key
            lookup[key.lower()] = key
        # later keys come from higher precedence sources
        matched = {}
        for key, value in data.items():
            target = lookup.get(key.lower(), key)
            if isinstance(matched.get(target), dict) and isinstance(value, dict):
                value = {**matched[target], **value}
            matched[target] = value
        return matched


class ValidCredentials(config_section):
    username: str = Field("TCCTest", alias="Username")
    password: str = Field("Test!456", alias="Password")


class TestSettings(config_section):
    __test__ = False # not a pytest test class

    api_base_url: str = Field("http://localhost:5214", alias="ApiBaseUrl")
    auth_endpoint: str = Field("/api/auth/token", alias="AuthEndpoint")
    account_endpoint: str = Field("/api/account/create", alias="AccountEndpoint")
    default_timeout: int = Field(30000, ge=1, alias="DefaultTimeout") # milliseconds
    retry_attempts: int = Field(3, ge=0, alias="RetryAttempts")
    valid_credentials: ValidCredentials = Field(default_factory=ValidCredentials, alias="ValidCredentials")


def flatten(data: Dict[str, Any], prefix: str = "") -> Dict[str, Any]:
    flat = {}
    for key, value in data.items():
        path = f"{prefix}:{key}" if prefix else key
        if isinstance(value, dict):
            flat.update(flatten(value, path))
        else:
            flat[path] = value
    return flat


class TestConfiguration(BaseSettings):
    """Test settings loaded from defaults, JSON file, .env and environment variables."""

    __test__ = False # not a pytest test class

    test_settings: TestSettings = Field(default_factory=TestSettings, alias="TestSettings")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        json_file = os.getenv(SETTINGS_FILE_ENV, SETTINGS_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            JsonConfigSettingsSource(settings_cls, json_file=json_file),
        )

    def get(self, key: str, default: Any = None):
        """Look up a ``Section:Key`` path, e.g. ``TestSettings:ApiBaseUrl``."""
        return flatten(self.model_dump(by_alias=True)).get(key, default)

    @property
    def api_base_url(self) -> str:
        return self.test_settings.api_base_url

    @property
    def auth_endpoint(self) -> str:
        return self.test_settings.auth_endpoint

    @property
    def account_endpoint(self) -> str:
        return self.test_settings.account_endpoint

    @property
    def default_timeout(self) -> int:
        """Request timeout in milliseconds."""
        return self.test_settings.default_timeout

    @property
    def retry_attempts(self) -> int:
        return self.test_settings.retry_attempts

    @property
    def valid_username(self) -> str:
        return self.test_settings.valid_credentials.username

    @property
    def valid_password(self) -> str:
        return self.test_settings.valid_credentials.password

    def get_full_api_url(self) -> str:
        return f"{self.api_base_url}{self.auth_endpoint}"

    def create_http_client(self) -> httpx.Client:
        return httpx.Client(base_url=self.api_base_url, timeout=self.default_timeout / 1000)
