"""Configuration loader."""

import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from ..errors import InvalidConfiguration
from .models import ConfigModel

# Environment variable -> (section, key, type)
ENV_OVERRIDES = {
    "TRENDING_CACHE_TTL": ("trending", "cache_ttl_seconds", int),
    "LOCATION_CLUSTER_DEGREES": ("trending", "cluster_degrees", float),
    "RECENT_EVENTS_WINDOW_HOURS": ("trending", "recent_window_hours", float),
}


class Config:
    """Configuration manager."""

    def __init__(self, config_path: Optional[Path] = None) -> None:
        """Initialize config manager."""
        if config_path is None:
            config_path = Path.home() / ".config" / "newstrend" / "config.yaml"
        self.config_path = config_path
        self._config: Optional[ConfigModel] = None

    @property
    def config(self) -> ConfigModel:
        """Get loaded config."""
        if self._config is None:
            load_dotenv()
            self._config = load_config(self.config_path, environ=os.environ)
        return self._config

    def get_db_config(self) -> Dict[str, Any]:
        """Get database configuration dict."""
        db_config = self.config.postgres.model_dump()

        # Handle password from environment if specified
        if db_config.get("password_env"):
            password = os.environ.get(db_config["password_env"])
            if password:
                db_config["password"] = password

        return db_config


def apply_env_overrides(config_data: Dict[str, Any], environ: Dict[str, str]) -> Dict[str, Any]:
    """Overlay supported environment variables onto raw config data."""
    for env_name, (section, key, cast) in ENV_OVERRIDES.items():
        raw = environ.get(env_name)
        if raw is None or raw == "":
            continue
        try:
            value = cast(raw)
        except ValueError:
            raise InvalidConfiguration(f"{env_name} must be a number, got {raw!r}")
        config_data.setdefault(section, {})[key] = value
    return config_data


def load_config(config_path: Path, environ: Optional[Dict[str, str]] = None) -> ConfigModel:
    """Load configuration from YAML file."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path) as f:
            config_data = yaml.safe_load(f)

        if config_data is None:
            config_data = {}

        if environ is not None:
            config_data = apply_env_overrides(config_data, environ)

        return ConfigModel(**config_data)
    except yaml.YAMLError as e:
        raise InvalidConfiguration(f"Invalid YAML in config file: {e}")
    except ValidationError as e:
        raise InvalidConfiguration(f"Invalid configuration: {e}")


def save_config(config: ConfigModel, config_path: Path) -> None:
    """Save configuration to YAML file."""
    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(), f, default_flow_style=False, sort_keys=False)
