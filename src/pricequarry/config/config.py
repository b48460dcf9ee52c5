"""
Configuration management for PriceQuarry using Pydantic.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Setup Logging ---
log = logging.getLogger(__name__)

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 13_4) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0 Safari/537.36"
)

DEFAULT_PRICE_SELECTOR = (
    '[class*=price], [id*=price], meta[itemprop=price], meta[property="product:price:amount"]'
)

# --- Nested Configuration Models ---


class FetchConfig(BaseModel):
    """Static HTTP fetch configuration."""

    user_agent: str = Field(default=DEFAULT_USER_AGENT, description="User-Agent sent with page requests.")
    accept: str = Field(default="text/html", description="Accept header sent with page requests.")
    timeout: float = Field(default=14.0, description="Total request timeout in seconds.")
    max_redirects: int = Field(default=5, ge=0, description="Maximum redirects followed per request.")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeout must be positive")
        return v


class RenderConfig(BaseModel):
    """Headless browser configuration."""

    enabled: bool = Field(default=True, description="Allow falling back to a headless browser.")
    headless: bool = Field(default=True, description="Run Chromium without a visible window.")
    navigation_timeout: float = Field(default=25.0, description="Page navigation timeout in seconds.")
    price_wait_timeout: float = Field(
        default=6.0, description="Best-effort wait for price-bearing content, in seconds."
    )
    price_selector: str = Field(default=DEFAULT_PRICE_SELECTOR, description="Selector signalling rendered prices.")
    blocked_resource_types: List[str] = Field(
        default=["image", "media", "font"], description="Request resource types aborted during rendering."
    )
    viewport_width: int = Field(default=1366, gt=0)
    viewport_height: int = Field(default=900, gt=0)
    launch_args: List[str] = Field(
        default=["--disable-dev-shm-usage"], description="Extra Chromium command-line arguments."
    )

    @field_validator("navigation_timeout", "price_wait_timeout")
    @classmethod
    def validate_timeouts(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v


class MonitoringConfig(BaseModel):
    """Configuration for logging and metrics."""

    log_level: str = Field(default="INFO", description="Logging level (e.g., DEBUG, INFO, WARNING).")
    log_file: Optional[str] = Field(default=None, description="Path to log file. If None, logs to console.")
    metrics_enabled: bool = Field(default=True, description="Record Prometheus metrics for scrapes.")

    @field_validator("log_file", mode="before")
    @classmethod
    def create_parent_dir(cls, v: str | Path | None) -> str | None:
        if v is None:
            return None
        path = Path(v)
        path.parent.mkdir(parents=True, exist_ok=True)
        return str(path)


# --- Main Configuration Class ---


class Config(BaseSettings):
    project_name: str = "PriceQuarry"
    fetch: FetchConfig = Field(default_factory=FetchConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    monitoring: MonitoringConfig = Field(default_factory=MonitoringConfig)

    model_config = SettingsConfigDict(env_prefix="PRICEQUARRY_", env_nested_delimiter="__", case_sensitive=False)

    @classmethod
    def from_yaml(cls, path: Path) -> Config:
        log.debug("Loading configuration from YAML file: %s", path)
        if not path.is_file():
            raise FileNotFoundError(f"Configuration file not found or is not a file: {path}")
        with open(path, "r", encoding="utf-8") as f:
            yaml_data = yaml.safe_load(f)
        if not yaml_data:
            log.warning("Configuration file is empty: %s. Using default settings.", path)
            return cls.model_validate({})
        return cls.model_validate(yaml_data)


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from ``path``, ``$PRICEQUARRY_CONFIG`` or the environment alone."""
    if path is None:
        env_path = os.getenv("PRICEQUARRY_CONFIG")
        path = Path(env_path) if env_path else None
    if path is not None:
        return Config.from_yaml(path)
    return Config()
