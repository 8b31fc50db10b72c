"""Configuration management for the video catalog service."""

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


def expand_env_vars(value: Any) -> Any:
    """Recursively expand environment variables in strings, dicts, and lists.

    Supports both ${VAR} and $VAR patterns.
    """
    if isinstance(value, str):
        # Expand ${VAR} pattern
        pattern = re.compile(r'\$\{([^}]+)\}')
        result = pattern.sub(lambda m: os.environ.get(m.group(1), ''), value)
        # Expand $VAR pattern
        pattern = re.compile(r'\$([A-Za-z_][A-Za-z0-9_]*)')
        result = pattern.sub(lambda m: os.environ.get(m.group(1), ''), result)
        return result
    elif isinstance(value, dict):
        return {k: expand_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [expand_env_vars(item) for item in value]
    else:
        return value


def _split_origins(value: str) -> list[str]:
    return [origin.strip() for origin in value.split(",") if origin.strip()]


@dataclass
class WebConfig:
    """HTTP server configuration."""
    host: str = "0.0.0.0"
    port: int = 5000
    api_prefix: str = "/api"  # front end calls http://host:5000/api/...
    cors_origins: list[str] = field(default_factory=lambda: ["*"])

    def __post_init__(self):
        if isinstance(self.cors_origins, str):
            self.cors_origins = _split_origins(self.cors_origins)
        self.api_prefix = self.api_prefix.rstrip("/")


@dataclass
class DatabaseConfig:
    """Database configuration."""
    path: str = "db/catalog.db"
    pool_size: int = 10
    pool_timeout: float = 30.0  # seconds a request waits for a free connection


@dataclass
class CatalogConfig:
    """Listing defaults."""
    default_page_size: int = 10


@dataclass
class Config:
    """Main configuration container."""
    web: WebConfig = field(default_factory=WebConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)

    @classmethod
    def from_yaml(cls, path: Path | str) -> "Config":
        """Load configuration from YAML file with environment variable expansion."""
        path = Path(path)
        with open(path, "r") as f:
            raw_config = yaml.safe_load(f) or {}

        expanded_config = expand_env_vars(raw_config)

        return cls(
            web=WebConfig(**(expanded_config.get("web") or {})),
            database=DatabaseConfig(**(expanded_config.get("database") or {})),
            catalog=CatalogConfig(**(expanded_config.get("catalog") or {})),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration directly from environment variables."""
        return cls(
            web=WebConfig(
                host=os.environ.get("VCAT_WEB_HOST", "0.0.0.0"),
                port=int(os.environ.get("VCAT_WEB_PORT", "5000")),
                api_prefix=os.environ.get("VCAT_API_PREFIX", "/api"),
                cors_origins=_split_origins(os.environ.get("VCAT_CORS_ORIGINS", "*")),
            ),
            database=DatabaseConfig(
                path=os.environ.get("VCAT_DB_PATH", "db/catalog.db"),
                pool_size=int(os.environ.get("VCAT_DB_POOL_SIZE", "10")),
                pool_timeout=float(os.environ.get("VCAT_DB_POOL_TIMEOUT", "30")),
            ),
            catalog=CatalogConfig(
                default_page_size=int(os.environ.get("VCAT_DEFAULT_PAGE_SIZE", "10")),
            ),
        )


def load_config(config_path: str | None = None) -> Config:
    """Load configuration from file or environment.

    Tries in order:
    1. Provided config_path
    2. Default paths: config.yaml, config.yml
    3. Environment variables (fallback)
    """
    config: Config | None = None

    if config_path:
        path = Path(config_path)
        if path.exists():
            config = Config.from_yaml(path)
        else:
            raise FileNotFoundError(f"Config file not found: {config_path}")
    else:
        for default_path in ["config.yaml", "config.yml"]:
            path = Path(default_path)
            if path.exists():
                config = Config.from_yaml(path)
                break

    if config is None:
        config = Config.from_env()

    if int(config.database.pool_size) < 1:
        logger.warning("database.pool_size %r must be positive, using 10", config.database.pool_size)
        config.database.pool_size = 10
    if float(config.database.pool_timeout) <= 0:
        logger.warning("database.pool_timeout %r must be positive, using 30s",
                       config.database.pool_timeout)
        config.database.pool_timeout = 30.0
    if int(config.catalog.default_page_size) < 1:
        logger.warning("catalog.default_page_size %r must be positive, using 10",
                       config.catalog.default_page_size)
        config.catalog.default_page_size = 10

    return config
