"""Application configuration and settings management."""

from pathlib import Path
from typing import Annotated, Any, Literal, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="ROUTEPLANNER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Service Route Planner API"
    api_prefix: str = "/api"
    data_root: Path = Field(default=Path("data"), description="Root directory for persisted run outputs.")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    default_route_count: int = Field(default=1, ge=1)
    max_cluster_iterations: int = Field(default=100, ge=1)
    convergence_tolerance_degrees: float = Field(
        default=0.0001,
        gt=0.0,
        description="Largest centroid move (degrees, either axis) still treated as converged.",
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for k-means++ centroid selection. Unset uses OS entropy.",
    )
    sequencing_workers: int = Field(
        default=1,
        ge=1,
        description="Thread pool size used to sequence clusters. 1 runs sequentially.",
    )
    route_colors: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "#3b82f6",  # blue
            "#ef4444",  # red
            "#22c55e",  # green
            "#f59e0b",  # amber
            "#a855f7",  # purple
            "#ec4899",  # pink
            "#14b8a6",  # teal
            "#f97316",  # orange
            "#6366f1",  # indigo
            "#84cc16",  # lime
        ),
        description="Display palette, cycled when routes outnumber colors.",
    )
    max_navigation_waypoints: int = Field(
        default=10,
        ge=1,
        description="Waypoint limit of the downstream navigation links.",
    )

    nominatim_base_url: str = Field(
        default="https://nominatim.openstreetmap.org",
        description="Base URL of the Nominatim geocoding service.",
    )
    nominatim_user_agent: str = "ServiceRoutePlanner/1.0"
    geocoding_timeout_seconds: float = Field(default=10.0, gt=0.0)
    geocoding_max_retries: int = Field(default=2, ge=0)
    geocoding_backoff_seconds: float = Field(default=1.0, ge=0.0)
    geocoding_rate_limit_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Pause between batch geocoding requests (Nominatim allows 1 req/s).",
    )

    frontend_allowed_origins: Annotated[tuple[str, ...], NoDecode] = Field(
        default=(
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "capacitor://localhost",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("data_root", mode="before")
    @classmethod
    def _expand_path(cls, value: Any) -> Path:
        path_value = value if isinstance(value, Path) else Path(str(value))
        return path_value.expanduser().resolve()

    @field_validator("frontend_allowed_origins", "route_colors", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()

    @field_validator("route_colors")
    @classmethod
    def _require_palette(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        if not value:
            raise ValueError("route_colors must contain at least one color")
        return value


settings = Settings()
