"""Configuration models."""

from typing import Optional

from pydantic import BaseModel, Field, field_validator


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("newstrend", description="Database name")
    user: str = Field("newstrend_user", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field(None, description="Environment variable for password")


class TrendingConfig(BaseModel):
    """Trending computation and cache configuration."""

    cache_ttl_seconds: int = Field(300, description="Lifetime of a cached cluster ranking", gt=0)
    cluster_degrees: float = Field(0.5, description="Cache cluster granularity in degrees", gt=0)
    recent_window_hours: float = Field(1.0, description="How far back events are considered", gt=0)
    half_life_hours: float = Field(12.0, description="Recency decay constant", gt=0)
    distance_scale_km: float = Field(100.0, description="Distance at which geo weight halves", gt=0)
    click_weight: float = Field(2.0, ge=0.0)
    view_weight: float = Field(1.0, ge=0.0)
    limit_multiplier: int = Field(
        3,
        description="How many more articles than requested to compute and cache",
        ge=1,
    )


class SimulationConfig(BaseModel):
    """Background event simulation configuration."""

    enabled: bool = Field(True, description="Start the simulator with the service")
    interval_seconds: float = Field(5.0, description="Seconds between ticks", gt=0)
    sample_size: int = Field(100, description="Articles sampled per tick", ge=1)
    min_events: int = Field(5, description="Minimum events per tick", ge=0)
    max_events: int = Field(20, description="Maximum events per tick", ge=0)
    click_probability: float = Field(0.4, ge=0.0, le=1.0)
    max_offset_degrees: float = Field(
        1.0,
        description="Maximum distance of a simulated user from the article location",
        ge=0.0,
    )

    @field_validator("max_events")
    @classmethod
    def validate_event_range(cls, v: int, info) -> int:
        """Validate that the per-tick event range is not inverted."""
        min_events = info.data.get("min_events", 5)
        if v < min_events:
            raise ValueError(f"max_events ({v}) must be >= min_events ({min_events})")
        return v


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    trending: TrendingConfig = Field(default_factory=TrendingConfig)
    simulation: SimulationConfig = Field(default_factory=SimulationConfig)
