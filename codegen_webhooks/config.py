"""Configuration management with Pydantic Settings + optional YAML."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from codegen_webhooks.constants import (
    DEFAULT_BIND,
    DEFAULT_PORT,
    DEFAULT_WEBHOOK_MAX_AGE,
    DEFAULT_WEBHOOK_PATH,
    DEFAULT_WEBHOOK_VALIDATE_TIMESTAMP,
)
from codegen_webhooks.utils.platform import get_config_dir


class WebhookHandlerConfig(BaseModel):
    """Immutable settings captured when a WebhookHandler is constructed."""

    model_config = ConfigDict(frozen=True)

    secret: str
    max_age: int = Field(default=DEFAULT_WEBHOOK_MAX_AGE, ge=0)  # seconds
    validate_timestamp: bool = DEFAULT_WEBHOOK_VALIDATE_TIMESTAMP

    @field_validator("secret")
    @classmethod
    def _secret_required(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("Webhook secret is required")
        return value


class WebhookConfig(BaseModel):
    secret: str = ""
    max_age: int = DEFAULT_WEBHOOK_MAX_AGE
    validate_timestamp: bool = DEFAULT_WEBHOOK_VALIDATE_TIMESTAMP


class ServerConfig(BaseModel):
    bind: str = DEFAULT_BIND
    port: int = DEFAULT_PORT
    path: str = DEFAULT_WEBHOOK_PATH


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CODEGEN_WEBHOOKS_",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    webhook: WebhookConfig = Field(default_factory=WebhookConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # YAML values arrive as init kwargs; env vars win over them
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    def handler_config(self) -> WebhookHandlerConfig:
        """Build the handler config; raises ValueError when no secret is set."""
        return WebhookHandlerConfig(
            secret=self.webhook.secret,
            max_age=self.webhook.max_age,
            validate_timestamp=self.webhook.validate_timestamp,
        )


def load_settings(config_path: str | Path | None = None) -> Settings:
    """Load settings from env vars, optionally overlaying a YAML config."""
    yaml_data: dict[str, Any] = {}

    # Determine config file path
    if config_path is None:
        config_path = os.environ.get("CODEGEN_WEBHOOKS_CONFIG")
    if config_path is None:
        default = get_config_dir() / "config.yaml"
        if default.exists():
            config_path = default

    # Load YAML if found
    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path) as f:
                yaml_data = yaml.safe_load(f) or {}

    # Build settings: YAML values as defaults, env vars override
    return Settings(**yaml_data)
