"""Configuration management."""

import os
from pydantic import BaseModel, Field
from dotenv import load_dotenv

from .errors import ConfigurationError

# Load environment variables
load_dotenv()


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name, "")
    return int(value) if value.strip() else default


class Config(BaseModel):
    """Application configuration."""

    # Generation provider
    runway_api_key: str = Field(
        default_factory=lambda: os.getenv("RUNWAY_API_KEY", ""),
        description="Runway API key"
    )
    runway_api_base: str = Field(
        default_factory=lambda: os.getenv("RUNWAY_API_BASE", "https://api.runwayml.com/v1"),
        description="Runway API base URL"
    )
    runway_model: str = Field(
        default_factory=lambda: os.getenv("RUNWAY_MODEL", "gen3a_turbo"),
        description="Runway generation model"
    )

    # Rendering engine
    shotstack_api_key: str = Field(
        default_factory=lambda: os.getenv("SHOTSTACK_API_KEY", ""),
        description="Shotstack API key"
    )
    shotstack_host: str = Field(
        default_factory=lambda: os.getenv("SHOTSTACK_HOST", "https://api.shotstack.io/stage"),
        description="Shotstack API host (use /v1 for production)"
    )

    # Polling budget
    poll_max_attempts: int = Field(
        default_factory=lambda: _env_int("REELMAKER_POLL_MAX_ATTEMPTS", 120),
        description="Maximum status checks per task",
        gt=0
    )
    poll_interval_ms: int = Field(
        default_factory=lambda: _env_int("REELMAKER_POLL_INTERVAL_MS", 5000),
        description="Milliseconds between status checks",
        ge=0
    )

    # Composition
    caption_style: str = Field(
        default_factory=lambda: os.getenv("REELMAKER_CAPTION_STYLE", "bold-caption"),
        description="Default caption style preset"
    )

    def validate_generation_required(self) -> None:
        """Validate that generation provider credentials are set.

        Raises:
            ConfigurationError: If the Runway API key is missing.
        """
        if not self.runway_api_key:
            raise ConfigurationError("RUNWAY_API_KEY not set")

    def validate_render_required(self) -> None:
        """Validate that rendering engine credentials are set.

        Raises:
            ConfigurationError: If any required Shotstack configuration is missing.
        """
        missing: list[str] = []

        if not self.shotstack_api_key:
            missing.append("SHOTSTACK_API_KEY")
        if not self.shotstack_host:
            missing.append("SHOTSTACK_HOST")

        if missing:
            raise ConfigurationError(
                f"Missing required render configuration: {', '.join(missing)}. "
                "Set the corresponding environment variables."
            )


# Global config instance
config = Config()
