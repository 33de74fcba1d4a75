"""
Runtime settings read from the environment (and a local .env file).
"""
from typing import Optional

from pydantic import Field, PositiveFloat, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_widget.core.client import DEFAULT_TIMEOUT
from chat_widget.core.errors import ConfigurationError

DEFAULT_SHEETS_RANGE = "Sheet1!A1:D10"
DEFAULT_SIGNIN_TIMEOUT = 300.0
SHEETS_SCOPE = "https://www.googleapis.com/auth/spreadsheets.readonly"
SHEETS_DISCOVERY_URL = "https://sheets.googleapis.com/$discovery/rest?version=v4"


class Settings(BaseSettings):
    # chat endpoint (no defaults: a missing value only fails the chat call)
    chat_api_url: Optional[str] = Field(None, validation_alias="CHAT_API_URL")
    chat_api_key: Optional[str] = Field(None, validation_alias="CHAT_API_KEY")
    chat_timeout: PositiveFloat = Field(DEFAULT_TIMEOUT, validation_alias="CHAT_TIMEOUT")
    context_file: Optional[str] = Field(None, validation_alias="CHAT_CONTEXT_FILE")

    # identity / sheets
    auth_client_id: Optional[str] = Field(None, validation_alias="AUTH_CLIENT_ID")
    auth_client_secret: Optional[str] = Field(None, validation_alias="AUTH_CLIENT_SECRET")
    sheets_api_key: Optional[str] = Field(None, validation_alias="SHEETS_API_KEY")
    spreadsheet_id: Optional[str] = Field(None, validation_alias="SPREADSHEET_ID")
    sheets_range: str = Field(DEFAULT_SHEETS_RANGE, validation_alias="SHEETS_RANGE")
    sheets_enabled: bool = Field(True, validation_alias="SHEETS_ENABLED")
    sheets_signin_timeout: PositiveFloat = Field(DEFAULT_SIGNIN_TIMEOUT, validation_alias="SHEETS_SIGNIN_TIMEOUT")

    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        str_strip_whitespace=True,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @classmethod
    def from_env(cls, **overrides) -> "Settings":
        """Load settings, reporting invalid values as ConfigurationError."""
        try:
            return cls(**overrides)
        except ValidationError as exc:
            raise ConfigurationError(str(exc)) from exc
