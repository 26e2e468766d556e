"""Caption data models."""

from typing import Tuple
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator, model_validator


class CaptionSegment(BaseModel):
    """A timed piece of caption text."""

    id: str = Field(default_factory=lambda: uuid4().hex, description="Caption identifier")
    text: str = Field(..., description="Caption text")
    start: float = Field(..., description="Start time in seconds", ge=0)
    end: float = Field(..., description="End time in seconds")

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @field_validator("text")
    @classmethod
    def _text_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("caption text cannot be empty")
        return value.strip()

    @model_validator(mode="after")
    def _end_after_start(self) -> "CaptionSegment":
        if self.end <= self.start:
            raise ValueError("caption end must be greater than start")
        return self

    @property
    def length(self) -> float:
        return self.end - self.start


class CaptionSet(BaseModel):
    """Caption segments kept in ascending ``start`` order.

    Segments may overlap; ordering among equal starts follows insertion.
    """

    segments: Tuple[CaptionSegment, ...] = Field(default_factory=tuple)

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @field_validator("segments")
    @classmethod
    def _sorted(cls, value: Tuple[CaptionSegment, ...]) -> Tuple[CaptionSegment, ...]:
        return tuple(sorted(value, key=lambda segment: segment.start))

    def __len__(self) -> int:
        return len(self.segments)

    def __bool__(self) -> bool:
        return bool(self.segments)

    def with_segment(self, segment: CaptionSegment) -> "CaptionSet":
        """Return a new set that also contains ``segment``."""
        return CaptionSet(segments=self.segments + (segment,))

    def without(self, caption_id: str) -> "CaptionSet":
        """Return a new set with the segment ``caption_id`` removed."""
        return CaptionSet(segments=tuple(s for s in self.segments if s.id != caption_id))
