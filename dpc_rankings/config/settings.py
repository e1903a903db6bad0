import logging

from pydantic import Field, HttpUrl
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Application settings loaded from environment variables or .env file."""

    # Wiki API Configuration
    wiki_api_url: HttpUrl = Field(
        "https://liquipedia.net/dota2/api.php",
        description="MediaWiki API endpoint serving the rankings page.",
    )
    rankings_page: str = Field(
        "Dota_Pro_Circuit/Rankings/Teams",
        description="Title of the wiki page holding the team rankings table.",
    )
    user_agent: str = Field(
        "dpc-rankings/0.1.0 (https://github.com/dpc-rankings/dpc-rankings)",
        description="User-Agent sent with every wiki request (the wiki asks for contact info).",
    )

    # HTTP Behaviour
    request_timeout: float = Field(
        30.0, gt=0, description="Timeout in seconds for a single wiki request."
    )
    cache_ttl_seconds: float = Field(
        600.0,
        ge=0,
        description="How long a fetched page is reused before refetching (0 disables).",
    )
    min_request_interval: float = Field(
        30.0,
        ge=0,
        description="Minimum seconds between two network requests to the wiki.",
    )

    # Logging Configuration
    log_level: str = Field(
        "INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."
    )

    # Pydantic Settings Configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )


def load_settings() -> AppSettings:
    """Loads and validates application settings."""
    try:
        settings = AppSettings()
        log_level_upper = settings.log_level.upper()
        # Validate log_level even if loaded from .env
        if log_level_upper not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            logging.warning(
                f"Invalid LOG_LEVEL '{settings.log_level}' found in .env or default. Using INFO."
            )
            settings.log_level = "INFO"
        else:
            settings.log_level = log_level_upper
        return settings
    except Exception as e:
        logging.exception(f"Error loading application settings: {e}")
        raise SystemExit("Failed to load application settings. Exiting.")


settings: AppSettings = load_settings()
