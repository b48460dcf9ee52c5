"""Configuration for PriceQuarry."""

from .config import Config, FetchConfig, MonitoringConfig, RenderConfig, load_config

__all__ = ["Config", "FetchConfig", "RenderConfig", "MonitoringConfig", "load_config"]
