"""Centralized configuration using Pydantic Settings.

Configuration can be overridden via environment variables:
- CSAIR_DATA_DATA_DIR=/path/to/data
- CSAIR_DATA_DATA_FILE=map_data.json
- CSAIR_MAP_BASE_URL=http://www.gcmap.com/mapui?P=
- CSAIR_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class DataConfig(BaseSettings):
    """Network data source configuration.

    Environment variables prefixed with CSAIR_DATA_.
    """

    model_config = SettingsConfigDict(env_prefix="CSAIR_DATA_")

    data_dir: Path = Field(
        default_factory=lambda: Path(__file__).resolve().parent.parent / "data"
    )
    data_file: str = "map_data.json"

    @property
    def data_path(self) -> Path:
        """Full path to the network JSON file."""
        return self.data_dir / self.data_file


class MapConfig(BaseSettings):
    """Map link and rendering configuration.

    Environment variables prefixed with CSAIR_MAP_.
    """

    model_config = SettingsConfigDict(env_prefix="CSAIR_MAP_")

    base_url: str = "http://www.gcmap.com/mapui?P="
    zoom_start: int = 2


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Environment variables prefixed with CSAIR_LOG_.
    """

    model_config = SettingsConfigDict(env_prefix="CSAIR_LOG_")

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class AppConfig(BaseSettings):
    """Main application configuration aggregating all sub-configs.

        config = get_config()
        print(config.data.data_path)
        print(config.map.base_url)

    Environment variables prefixed with CSAIR_.
    """

    model_config = SettingsConfigDict(env_prefix="CSAIR_")

    data: DataConfig = Field(default_factory=DataConfig)
    map: MapConfig = Field(default_factory=MapConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    @property
    def project_root(self) -> Path:
        """Return the project root directory."""
        return Path(__file__).resolve().parent.parent


@lru_cache(maxsize=1)
def get_config() -> AppConfig:
    """Get the application configuration.

    Configuration is loaded once and cached. To reload configuration
    (e.g., in tests), use reset_config() first.
    """
    return AppConfig()


def reset_config() -> None:
    """Reset the configuration cache."""
    get_config.cache_clear()


def configure_logging(config: Optional[ObservabilityConfig] = None) -> None:
    """Apply the logging level and format to the root logger.

    Handlers already installed by the host application are left alone.
    """
    config = config or get_config().observability
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(format=config.format)
    root.setLevel(config.level.upper())
