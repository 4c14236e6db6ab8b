"""Configuration management for Kanga Markets"""

import os
import sys
from dataclasses import dataclass

from dotenv import load_dotenv
from loguru import logger

from kanga_markets.shared.constants import (
    DEFAULT_MAX_SORTS,
    DEFAULT_SEARCH_DEBOUNCE_MS,
)
from kanga_markets.shared.exceptions import ConfigurationError


def _env_int(key: str, default: int) -> int:
    """Read an integer env var, falling back to default when unparsable"""
    value = os.getenv(key, "").strip()
    try:
        return int(value)
    except ValueError:
        return default


def _env_bool(key: str, default: bool) -> bool:
    value = os.getenv(key, "").strip().lower()
    if value in ("true", "1"):
        return True
    if value in ("false", "0"):
        return False
    return default


@dataclass
class Config:
    """Configuration for Kanga Markets loaded from environment variables"""

    api_base_url: str = "https://public.kanga.exchange"

    # Request timeout in milliseconds
    api_timeout_ms: int = 10000

    # Retries after the first attempt for network errors, 5xx and 429
    api_retry_attempts: int = 3

    # When False only errors reach the console
    enable_logging: bool = True

    # Quiet period before a search query is applied
    search_debounce_ms: int = DEFAULT_SEARCH_DEBOUNCE_MS

    # Maximum number of simultaneous sort keys
    max_sorts: int = DEFAULT_MAX_SORTS

    @property
    def api_timeout_seconds(self) -> float:
        return self.api_timeout_ms / 1000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables (and .env)

        Returns:
            Validated Config instance

        Raises:
            ConfigurationError: If any value is out of range
        """
        load_dotenv()

        config = cls(
            api_base_url=os.getenv("API_BASE_URL", cls.api_base_url).strip(),
            api_timeout_ms=_env_int("API_TIMEOUT", cls.api_timeout_ms),
            api_retry_attempts=_env_int(
                "API_RETRY_ATTEMPTS", cls.api_retry_attempts
            ),
            enable_logging=_env_bool("ENABLE_LOGGING", cls.enable_logging),
            search_debounce_ms=_env_int(
                "SEARCH_DEBOUNCE_MS", cls.search_debounce_ms
            ),
            max_sorts=_env_int("MAX_SORTS", cls.max_sorts),
        )
        config.validate()

        logger.info("Configuration loaded:")
        logger.info(f"  API Base URL: {config.api_base_url}")
        logger.info(f"  API Timeout: {config.api_timeout_ms} ms")
        logger.info(f"  API Retry Attempts: {config.api_retry_attempts}")
        logger.info(f"  Logging: {'Enabled' if config.enable_logging else 'Errors only'}")
        logger.info(f"  Search Debounce: {config.search_debounce_ms} ms")
        logger.info(f"  Max Sorts: {config.max_sorts}")

        return config

    def validate(self) -> None:
        """Check every setting and report all problems at once

        Raises:
            ConfigurationError: If any setting is invalid
        """
        errors = []

        if not self.api_base_url:
            errors.append("API_BASE_URL is required")

        if self.api_timeout_ms <= 0:
            errors.append("API_TIMEOUT must be positive")

        if not 0 <= self.api_retry_attempts <= 10:
            errors.append("API_RETRY_ATTEMPTS must be between 0 and 10")

        if self.search_debounce_ms < 0:
            errors.append("SEARCH_DEBOUNCE_MS must be non-negative")

        if self.max_sorts < 1:
            errors.append("MAX_SORTS must be at least 1")

        if errors:
            raise ConfigurationError(
                "Configuration validation failed:\n" + "\n".join(errors)
            )


def configure_logging(config: Config) -> None:
    """Replace loguru's default sink according to ``enable_logging``"""
    logger.remove()
    logger.add(sys.stderr, level="INFO" if config.enable_logging else "ERROR")
