"""Configuration management for newstrend."""

from .loader import Config, apply_env_overrides, load_config, save_config
from .models import ConfigModel, PostgresConfig, SimulationConfig, TrendingConfig

__all__ = [
    "Config",
    "ConfigModel",
    "PostgresConfig",
    "SimulationConfig",
    "TrendingConfig",
    "apply_env_overrides",
    "load_config",
    "save_config",
]
