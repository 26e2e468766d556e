"""Composition job manifest."""

from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from .overlay import MusicConfig, OverlayTextConfig


class CompositionJob(BaseModel):
    """Everything needed to build and render one final video."""

    video_url: str = Field(..., description="URL of the generated source video")
    duration: float = Field(..., description="Video duration in seconds", gt=0)
    caption_style: Optional[str] = Field(None, description="Caption style preset name")
    overlay: Optional[OverlayTextConfig] = Field(None, description="Banner text and captions")
    music: Optional[MusicConfig] = Field(None, description="Background music")

    class Config:
        """Pydantic config."""
        frozen = False
        extra = "forbid"

    @classmethod
    def from_yaml(cls, path: Path) -> "CompositionJob":
        """Load a job from a YAML file."""
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        return cls(**data)

    def to_yaml(self, path: Path) -> None:
        """Save the job to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)
