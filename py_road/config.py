"""Configuration management."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(
        default="console", description="Logging format (console or json)"
    )

    # Road search
    default_scale: float = Field(
        default=0.125, gt=0, description="World size of one search grid cell"
    )
    max_expanded_cells: Optional[int] = Field(
        default=None, description="Abort a search after expanding this many cells"
    )
    progress_interval: int = Field(
        default=1000, gt=0, description="Expansions between debug progress events"
    )

    # Heightmap and geometry
    noise_sample_scale: float = Field(
        default=0.05, gt=0, description="Lattice spacing of grid-indexed noise heightmaps"
    )
    marker_size: float = Field(
        default=0.1, gt=0, description="Edge length of road endpoint markers"
    )

    class Config:
        env_prefix = "ROAD_"
        env_file = ".env"
        extra = "ignore"


settings = Settings()
