from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from project_health.exceptions import ConfigError


class AppSettings(BaseSettings):
    name: str = "Project Health"
    version: str = "1.0.0"


class TrendSettings(BaseSettings):
    """
    Defaults for the per-project trend computation.
    """
    max_days: int = 30
    assume_sorted: bool = True  # history arrives newest-first from the snapshot service


class PortfolioSettings(BaseSettings):
    default_days: int = 30
    min_days: int = 1
    max_days: int = 90


class LoggingSettings(BaseSettings):
    level: str = "INFO"
    format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_nested_delimiter="__", env_file=".env", extra="ignore")
    app: AppSettings = AppSettings()
    trend: TrendSettings = TrendSettings()
    portfolio: PortfolioSettings = PortfolioSettings()
    logging: LoggingSettings = LoggingSettings()

    @classmethod
    def load(cls, config_path: Optional[Path] = None) -> "Settings":
        # Load from default path if exists
        default_path = Path("config/settings.yaml")
        path = config_path or (default_path if default_path.exists() else None)

        if not path:
            return cls()

        try:
            with open(path, "r") as f:
                config_data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot read settings from {path}: {e}")

        if not isinstance(config_data, dict):
            raise ConfigError(f"Settings file {path} must contain a mapping")

        try:
            return cls(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid settings in {path}: {e}")

settings = Settings.load()
