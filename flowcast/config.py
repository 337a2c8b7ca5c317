"""Application configuration loaded from environment variables."""

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """All configuration is loaded from ``FLOWCAST_*`` environment variables (or .env file)."""

    # --- App ---
    app_name: str = "FlowCast"
    app_version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"

    # --- Local storage ---
    data_dir: Path = Path.home() / ".flowcast"
    data_filename: str = "flowcast-data.json"

    # --- Server (loopback only by default) ---
    host: str = "127.0.0.1"
    port: int = 8765

    # --- CORS ---
    cors_origins: list[str] = ["http://localhost:8765", "http://127.0.0.1:8765"]

    model_config = SettingsConfigDict(
        env_prefix="FLOWCAST_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    @property
    def data_path(self) -> Path:
        return self.data_dir / self.data_filename


@lru_cache
def get_settings() -> Settings:
    return Settings()
