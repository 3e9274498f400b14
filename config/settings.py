"""Application settings and configuration."""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="WASTELAND_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Application
    app_name: str = Field(default="Wasteland Survivor")
    debug: bool = Field(default=False)
    game_version: str = Field(default="1.0.0")

    # Logging
    log_level: str = Field(default="INFO")
    log_file: Optional[str] = Field(default=None)

    # Storage
    data_dir: Path = Field(default=Path("./data/saves"))
    storage_backend: str = Field(default="file")

    # Game rules
    inventory_capacity: int = Field(default=15, ge=1)

    # MCP Server
    mcp_stdio_mode: bool = Field(default=True)

    @field_validator("storage_backend")
    @classmethod
    def _check_backend(cls, value: str) -> str:
        value = value.strip().lower()
        if value not in ("file", "memory"):
            raise ValueError(f"storage_backend must be 'file' or 'memory', got {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        return value.upper()

    def create_directories(self):
        """Create necessary directories. Should be called at application startup."""
        if self.storage_backend == "file":
            self.data_dir.mkdir(parents=True, exist_ok=True)


# Global settings instance
settings = Settings()
