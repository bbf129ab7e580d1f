# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to wiki endpoints, scrape pacing, output paths and logging config

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="VILLAIN_TIMELINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Wiki source
    series_name: str = Field(default="Amazing Spider-Man Vol 1", description="Series label written to the dataset")
    base_url: str = Field(
        default="https://marvel.fandom.com/wiki/Amazing_Spider-Man_Vol_1", description="Series page on the wiki"
    )
    issue_url_template: str = Field(
        default="https://marvel.fandom.com/wiki/Amazing_Spider-Man_Vol_1_{issue}",
        description="Issue page URL template, {issue} is replaced with the issue number",
    )
    issue_title_template: str = Field(
        default="Amazing Spider-Man #{issue}", description="Title given to successfully scraped issues"
    )
    user_agent: str = Field(
        default="Spider-Man Villain Timeline (Educational Project)", description="User-Agent sent to the wiki"
    )

    # Scrape pacing
    request_timeout: float = Field(default=10.0, description="HTTP timeout in seconds")
    request_delay: float = Field(default=1.0, ge=0.0, description="Pause between issue requests in seconds")
    fetch_max_attempts: int = Field(default=3, ge=1, description="Attempts per page for transient fetch errors")
    start_issue: int = Field(default=1, ge=1, description="First issue scraped by default")
    end_issue: int = Field(default=441, ge=1, description="Last issue scraped by default (inclusive)")

    # Output
    data_dir: Path = Field(default=Path("data"), description="Directory receiving villains.json and chart-config.json")
    public_data_dir: Path = Field(
        default=Path("public/data"), description="Directory the static chart page serves data from"
    )
    chart_width: int = Field(default=1200, gt=0, description="Chart width in pixels")
    chart_height: int = Field(default=600, gt=0, description="Chart height in pixels")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Built lazily on first get_config() call
_config_instance: Config | None = None


def get_config() -> Config:
    """Return the shared settings, reading the environment on first use."""
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Discard the cached settings and re-read VILLAIN_TIMELINE_* variables."""
    global _config_instance
    _config_instance = Config()
    return _config_instance
