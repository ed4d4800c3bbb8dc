"""Configuration settings for cargo_dockerize.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def _default_build_args() -> list[str]:
    """Return the default release-mode build arguments."""
    return ["build", "--release"]


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the CARGO_DOCKERIZE_
    prefix. CLI flags can override these at runtime.
    """

    model_config = SettingsConfigDict(
        env_prefix="CARGO_DOCKERIZE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Project discovery
    manifest_name: str = Field(
        default="Cargo.toml",
        min_length=1,
        description="Manifest file that marks the project root",
    )

    # External tools
    build_tool: str = Field(
        default="cargo",
        min_length=1,
        description="Executable used to compile the project",
    )
    build_args: list[str] = Field(
        default_factory=_default_build_args,
        description="Arguments passed to the build tool for a release build",
    )
    container_engine: str = Field(
        default="docker",
        min_length=1,
        description="Container engine executable (docker or a compatible CLI)",
    )
    vcs_tool: str = Field(
        default="git",
        min_length=1,
        description="Version-control executable used to resolve the revision",
    )

    # Operational
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


__all__ = ["Settings", "get_settings", "print_settings_json"]
