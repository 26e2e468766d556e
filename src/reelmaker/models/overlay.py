"""Overlay intent models: text overlays and background music.

``None`` in place of either config means "not requested"; passing ``None`` when
rebuilding a timeline removes a previously applied overlay.
"""

from enum import Enum

from pydantic import BaseModel, Field, field_validator

from .captions import CaptionSet


class OverlayTextConfig(BaseModel):
    """Persistent banner text plus timed captions."""

    overlay_text: str = Field(default="", description="Banner shown for the whole video")
    captions: CaptionSet = Field(default_factory=CaptionSet, description="Timed caption segments")

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @property
    def has_banner(self) -> bool:
        return bool(self.overlay_text.strip())


class MusicSource(str, Enum):
    """Where a music track comes from."""

    PRESET = "preset"
    UPLOADED = "uploaded"


class MusicConfig(BaseModel):
    """Background music selection."""

    source_kind: MusicSource = Field(default=MusicSource.PRESET, description="Track source")
    track_ref: str = Field(..., description="Preset track id, track URL, or uploaded file reference")
    volume: float = Field(default=0.3, description="Playback volume", ge=0.0, le=1.0)

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @field_validator("track_ref")
    @classmethod
    def _track_ref_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("track_ref is required")
        return value.strip()
