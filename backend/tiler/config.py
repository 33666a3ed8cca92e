"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    tiler_env: str = "development"
    tiler_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Render defaults for the CLI and API
    default_tile_index: int = 10
    default_scale: float = 16.0
    default_angle: float = 10.0

    # Smallest tile scale the CLI and API accept
    min_tile_scale: float = 1.0

    # Largest source image the API will decode, in pixels
    max_image_pixels: int = 40_000_000

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
