"""
Configuration loader for the Project Tracker API.
Loads configuration from YAML files and environment variables.
"""

from typing import Any, Dict, List, Optional
from pathlib import Path
import logging
import os

import yaml
from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)


class TrackerConfig(BaseModel):
    """Main Project Tracker configuration."""
    model_config = ConfigDict(extra="allow")

    # Environment
    environment: str = "development"
    debug: bool = False

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 3000
    public_url: str = ""  # Advertised in the OpenAPI servers list
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # Data
    seed_data: bool = True

    # Logging
    log_level: str = "INFO"

    @property
    def base_url(self) -> str:
        return self.public_url or f"http://localhost:{self.api_port}"


class ConfigLoader:
    """Load and manage Project Tracker configuration."""

    def __init__(self, config_dir: str = "config"):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
        """
        self.config_dir = Path(config_dir)
        self.config: Optional[TrackerConfig] = None
        self.load()

    def load(self) -> TrackerConfig:
        """Load configuration from YAML and environment variables."""

        # Determine which config file to load
        env = os.getenv("TRACKER_ENV", "development")
        config_file = self.config_dir / f"{env}.yaml"

        # Load default config first
        config = self._load_yaml(self.config_dir / "default.yaml")
        config["environment"] = env

        # Override with environment-specific config
        if config_file.exists():
            config.update(self._load_yaml(config_file))
        else:
            logger.debug(f"Config file not found: {config_file}, using defaults")

        # Override with environment variables
        config.update(self._load_from_env())

        self.config = TrackerConfig(**config)

        logger.info(f"Configuration loaded (environment: {self.config.environment}, port: {self.config.api_port})")

        return self.config

    def _load_yaml(self, path: Path) -> Dict[str, Any]:
        """Load YAML config file."""
        if not path.exists():
            return {}

        try:
            with open(path, "r") as f:
                data = yaml.safe_load(f)
                return data or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Failed to load YAML config {path}: {e}")
            return {}

    def _load_from_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        config = {}

        if port := os.getenv("PORT"):
            config["api_port"] = int(port)
        if host := os.getenv("TRACKER_HOST"):
            config["api_host"] = host
        if public_url := os.getenv("TRACKER_PUBLIC_URL"):
            config["public_url"] = public_url
        if log_level := os.getenv("TRACKER_LOG_LEVEL"):
            config["log_level"] = log_level.upper()
        if seed := os.getenv("TRACKER_SEED_DATA"):
            config["seed_data"] = seed.lower() in ("1", "true", "yes")
        if origins := os.getenv("TRACKER_CORS_ORIGINS"):
            config["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]

        return config

    def get(self) -> TrackerConfig:
        """Get current configuration."""
        if not self.config:
            self.load()
        return self.config

    def reload(self):
        """Reload configuration."""
        logger.info("Reloading configuration...")
        self.load()


# Global config instance
_global_config_loader: Optional[ConfigLoader] = None


def get_config() -> TrackerConfig:
    """Get the global Project Tracker configuration."""
    global _global_config_loader
    if _global_config_loader is None:
        _global_config_loader = ConfigLoader()
    return _global_config_loader.get()


def initialize_config(config_dir: str = "config") -> TrackerConfig:
    """Initialize the global configuration loader."""
    global _global_config_loader
    _global_config_loader = ConfigLoader(config_dir)
    return _global_config_loader.get()
