"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    rasterturn_env: str = "development"
    rasterturn_log_level: str = "debug"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Largest decoded image accepted by the API (width × height)
    max_image_pixels: int = 4096 * 4096

    # Largest result an ASCII preview is built for
    max_preview_pixels: int = 256 * 256

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
