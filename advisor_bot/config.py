"""Configuration management for the advisor bot.

Handles all application configuration including environment variables, an
optional YAML settings file, and default settings. Provides structured
configuration classes for different aspects of the application (bot,
recommendation API, storage, conversation state).
"""

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

logger = logging.getLogger(__name__)


class SectionSettings(BaseSettings):
    """Settings section that can be seeded from the YAML file.

    Environment variables win over values passed at construction time, which
    in turn win over field defaults.
    """
    model_config = SettingsConfigDict(populate_by_name=True)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, init_settings, dotenv_settings, file_secret_settings


class ApiConfig(SectionSettings):
    """Recommendation API access parameters.

    Attributes:
        url: Endpoint receiving chat history and the user message.
        timeout: Per-attempt request timeout in seconds.
        max_attempts: Attempts before giving up on a request.
        retry_base_delay: Base delay in seconds for linear backoff.
    """
    url: str = Field(
        default="https://networthchat.wstf.tech/chat", validation_alias="RECOMMENDATION_API_URL"
    )
    timeout: float = Field(default=15.0, validation_alias="RECOMMENDATION_TIMEOUT")
    max_attempts: int = Field(default=3, ge=1, validation_alias="RECOMMENDATION_MAX_ATTEMPTS")
    retry_base_delay: float = Field(default=1.0, ge=0, validation_alias="RECOMMENDATION_RETRY_DELAY")


class StorageConfig(SectionSettings):
    """Persisted favorites and feedback storage.

    Attributes:
        state_path: JSON document holding favorites and feedback.
    """
    state_path: str = Field(default="data/state.json", validation_alias="STATE_FILE_PATH")


class ConversationConfig(SectionSettings):
    """In-memory per-chat state limits.

    Attributes:
        history_limit: Number of most recent turns kept per chat.
        max_cached_chats: Chats kept in memory before the least recently used is evicted.
    """
    history_limit: int = Field(default=2, ge=1, validation_alias="HISTORY_LIMIT")
    max_cached_chats: int = Field(default=10000, ge=1, validation_alias="MAX_CACHED_CHATS")


class BotConfig(BaseSettings):
    """Main Telegram bot configuration.

    Attributes:
        bot_token: Telegram bot API token from environment.
        log_level: Root logging level name.
        port: Server port for webhook mode.
        listen_host: Interface the webhook server binds to.
        railway_domain: Railway public domain for webhooks.
        railway_url: Railway URL for webhooks (fallback).
    """
    bot_token: str = Field(default="", validation_alias="BOT_TOKEN")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    port: int = Field(default=8000, validation_alias="PORT")
    listen_host: str = Field(default="127.0.0.1", validation_alias="BOT_LISTEN_HOST")
    railway_domain: str | None = Field(default=None, validation_alias="RAILWAY_PUBLIC_DOMAIN")
    railway_url: str | None = Field(default=None, validation_alias="RAILWAY_URL")

    @property
    def webhook_domain(self) -> str | None:
        """Get webhook domain for Railway deployment.

        Returns:
            Domain string if available, None for polling mode.
        """
        return self.railway_domain or self.railway_url

    @property
    def use_webhook(self) -> bool:
        """Determine if webhook mode should be used.

        Returns:
            True if webhook domain is configured, False for polling mode.
        """
        return bool(self.webhook_domain)


class Config:
    """Application configuration manager.

    Centralizes loading of environment variables and the optional
    ``settings.yml`` overlay. For the api, storage and conversation sections
    the YAML values replace field defaults, while environment variables still
    take precedence over both.
    """

    def __init__(self, config_dir: Path | None = None):
        """Initialize configuration manager.

        Args:
            config_dir: Path to configuration directory, defaults to advisor_bot/config.
        """
        if config_dir is None:
            config_dir = Path(__file__).parent / "config"

        self.config_dir = Path(config_dir)

        self.bot = BotConfig()

        settings = self._load_settings()
        self.api = ApiConfig(**self._section(settings, "api"))
        self.storage = StorageConfig(**self._section(settings, "storage"))
        self.conversation = ConversationConfig(**self._section(settings, "conversation"))

    def _load_settings(self) -> dict[str, Any]:
        """Load section overrides from settings.yml.

        Returns:
            Mapping of section name to field overrides, empty if no file.
        """
        settings_path = self.config_dir / "settings.yml"
        if not settings_path.exists():
            return {}

        try:
            with open(settings_path) as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to read {settings_path}, using defaults: {e}")
            return {}

        if data is None:
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring {settings_path}: expected a mapping of sections")
            return {}

        return data

    def _section(self, settings: dict[str, Any], name: str) -> dict[str, Any]:
        section = settings.get(name) or {}
        if not isinstance(section, dict):
            logger.warning(f"Ignoring section {name!r} of settings.yml: expected a mapping")
            return {}
        return section

    def as_dict(self) -> dict[str, Any]:
        """Flatten the configuration for the dependency-injection container.

        Returns:
            Nested mapping keyed by section name.
        """
        return {
            "api": self.api.model_dump(),
            "storage": self.storage.model_dump(),
            "conversation": self.conversation.model_dump(),
        }


# Global configuration instance
config = Config()
