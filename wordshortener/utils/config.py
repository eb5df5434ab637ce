"""Utility functions for application configuration management.

Configuration is read once from environment variables at startup and frozen
into an AppConfig instance; nothing in it is mutable at runtime.

Environment variables (see wordshortener.constants.ENV):
    APP_NAME, APP_ENV                 – namespace Redis keys as <name>:<env>
    LOG_LEVEL, LOG_PATH               – see wordshortener.utils.logging
    REDIS_HOST (required)             – Redis server hostname
    REDIS_PORT, REDIS_DB              – Redis server port and database index
    REDIS_USERNAME, REDIS_PASSWORD    – Redis credentials (optional)
    REDIS_SOCKET_TIMEOUT              – seconds before a Redis call fails
    LINK_TTL_SECONDS                  – lifetime of a short link
    SWEEP_INTERVAL_SECONDS            – period of the reclamation sweep
    WORDLIST_PATH                     – vocabulary file (bundled list by default)
    LONG_POLL_TIMEOUT_SECONDS         – bound of a "wait for next message" request

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    app_name() -> str | None
        Return the application name (`APP_NAME`), or None if not set.

    app_prefix() -> str | None
        Return application prefix for DAOs, or None if `APP_NAME` is not set.

    load_config() -> AppConfig
        Read and validate every setting.

Example:
        >>> from wordshortener.utils.config import load_config
        >>> config = load_config()
        >>> config.redis['redis_host']
        'localhost'
        >>> config.link_ttl
        datetime.timedelta(days=1)
"""

import os
import logging
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import Field, NonNegativeInt, PositiveFloat, PositiveInt, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from wordshortener.constants import ENV, Defaults
from wordshortener.exceptions import BadConfigurationError
from wordshortener.utils.helpers import require_environment
from wordshortener.utils.words import default_wordlist_path


logger = logging.getLogger(__name__)


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def app_name() -> str | None:
    """Return the current application name by reading 'APP_NAME'

    Returns:
        str:
            Value of `APP_NAME` environment variable.
            None if variable is not set.
    """
    return os.environ.get(ENV.App.APP_NAME)


def app_prefix() -> str | None:
    """Return application prefix for DAOs

    Returns:
        str: app prefix as <app name>:<app env>.
             None if APP_NAME is not set.

    Example:
        >>> os.environ['APP_NAME'] = 'wordshortener'
        >>> os.environ['APP_ENV'] = 'local'
        >>> app_prefix()
        'wordshortener:local'
    """
    return None if app_name() is None else f'{app_name()}:{app_env()}'


class AppConfig(BaseSettings):
    """Application settings read from environment variables.

    Fields may also be passed by name, which is how tests build a config
    without touching the environment.
    """

    model_config = SettingsConfigDict(frozen=True, case_sensitive=True, env_ignore_empty=True, populate_by_name=True, extra='ignore')

    redis_host: str = Field(validation_alias=ENV.Redis.HOST.value)
    redis_port: PositiveInt = Field(Defaults.REDIS_PORT, validation_alias=ENV.Redis.PORT.value)
    redis_db: NonNegativeInt = Field(Defaults.REDIS_DB, validation_alias=ENV.Redis.DB.value)
    redis_username: str | None = Field(None, validation_alias=ENV.Redis.USERNAME.value)
    redis_password: str | None = Field(None, validation_alias=ENV.Redis.PASSWORD.value)
    redis_socket_timeout: PositiveFloat = Field(Defaults.REDIS_SOCKET_TIMEOUT, validation_alias=ENV.Redis.SOCKET_TIMEOUT.value)

    prefix: str | None = Field(default_factory=app_prefix)  # Redis key namespace
    link_ttl_seconds: PositiveInt = Field(Defaults.LINK_TTL, validation_alias=ENV.Shortener.LINK_TTL.value)
    sweep_interval_seconds: PositiveFloat = Field(Defaults.SWEEP_INTERVAL, validation_alias=ENV.Shortener.SWEEP_INTERVAL.value)
    wordlist_path: Path = Field(default_factory=default_wordlist_path, validation_alias=ENV.Shortener.WORDLIST_PATH.value)
    long_poll_timeout_seconds: PositiveFloat = Field(
        Defaults.LONG_POLL_TIMEOUT, validation_alias=ENV.MessageBoard.LONG_POLL_TIMEOUT.value
    )
    log_level: str = Field(Defaults.LOG_LEVEL, validation_alias=ENV.App.LOG_LEVEL.value)
    log_path: Path | None = Field(None, validation_alias=ENV.App.LOG_PATH.value)

    @field_validator('log_level')
    @classmethod
    def _upper_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def redis(self) -> dict[str, Any]:
        """Keyword arguments for RedisClientMixin."""
        return {
            'redis_host': self.redis_host,
            'redis_port': self.redis_port,
            'redis_db': self.redis_db,
            'redis_username': self.redis_username,
            'redis_password': self.redis_password,
            'redis_socket_timeout': self.redis_socket_timeout,
        }

    @property
    def link_ttl(self) -> timedelta:
        return timedelta(seconds=self.link_ttl_seconds)

    @property
    def sweep_interval(self) -> timedelta:
        return timedelta(seconds=self.sweep_interval_seconds)

    @property
    def long_poll_timeout(self) -> timedelta:
        return timedelta(seconds=self.long_poll_timeout_seconds)


def _describe(error: ValidationError) -> str:
    problems = [f"'{'.'.join(str(part) for part in e['loc'])}' {e['msg'].lower()}" for e in error.errors()]
    return 'Invalid environment variable ' + '; '.join(problems) + '.'


@require_environment(ENV.Redis.HOST)
def load_config() -> AppConfig:
    """Load the application configuration from environment variables

    Returns:
        AppConfig: validated, immutable configuration.

    Raises:
        MissingEnvironmentVariableError:
            If REDIS_HOST is not set.
        BadConfigurationError:
            If a numeric setting is not a (positive) number.
    """
    try:
        config = AppConfig()
    except ValidationError as e:
        raise BadConfigurationError(_describe(e)) from e

    logger.debug(
        'Loaded configuration.',
        extra={'prefix': config.prefix, 'linkTtl': config.link_ttl.total_seconds(), 'redisHost': config.redis_host},
    )
    return config
