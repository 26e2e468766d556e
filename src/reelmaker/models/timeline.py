"""Timeline document models: the contract handed to the rendering engine."""

from typing import Any, Dict, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field


class _RenderModel(BaseModel):
    """Base for timeline parts. Serialized with the engine's camelCase keys."""

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"
        populate_by_name = True


class Offset(_RenderModel):
    """Fractional offset from the anchor position."""

    x: float = 0.0
    y: float = 0.0


class Transition(_RenderModel):
    """Clip entry and exit transitions."""

    enter: Optional[str] = Field(None, alias="in")
    exit: Optional[str] = Field(None, alias="out")


class VideoAsset(_RenderModel):
    """Video source placed on a track."""

    type: Literal["video"] = "video"
    src: str
    volume: float = Field(default=0.0, ge=0.0, le=1.0)


class TitleAsset(_RenderModel):
    """Styled text placed on a track."""

    type: Literal["title"] = "title"
    text: str
    style: str
    size: str
    color: str
    background: str
    position: str
    offset: Offset = Field(default_factory=Offset)
    # Preset effects kept for inspection; the engine has no title fields for them
    shadow: bool = Field(default=False, exclude=True)
    outline: Optional[str] = Field(default=None, exclude=True)
    glow: Optional[str] = Field(default=None, exclude=True)


class AudioAsset(_RenderModel):
    """Audio source placed on a track."""

    type: Literal["audio"] = "audio"
    src: str
    volume: float = Field(default=1.0, ge=0.0, le=1.0)
    effect: Optional[str] = None


Asset = Union[VideoAsset, TitleAsset, AudioAsset]


class Clip(_RenderModel):
    """One timed placement of an asset within a track."""

    asset: Asset = Field(..., discriminator="type")
    start: float = Field(..., ge=0)
    length: float = Field(..., gt=0)
    transition: Optional[Transition] = None
    fit: Optional[str] = None
    scale: Optional[float] = None
    position: Optional[str] = None


class Track(_RenderModel):
    """Ordered clips sharing one compositing layer."""

    clips: Tuple[Clip, ...]


class Soundtrack(_RenderModel):
    """Background audio spanning the whole timeline."""

    src: str
    effect: Optional[str] = None
    volume: float = Field(default=1.0, ge=0.0, le=1.0)


# Output keys the engine accepts together
OUTPUT_PAYLOAD_FIELDS = {"format", "fps", "size"}


class OutputSize(_RenderModel):
    width: Literal[1080] = 1080
    height: Literal[1920] = 1920


class OutputSpec(_RenderModel):
    """Rendered output shape. Only 1080x1920 portrait mp4 at 25fps is supported.

    The engine rejects ``resolution`` alongside ``size``, so only format, fps
    and size are sent.
    """

    format: Literal["mp4"] = "mp4"
    resolution: Literal["hd"] = "hd"
    aspect_ratio: Literal["9:16"] = Field(default="9:16", alias="aspectRatio")
    fps: Literal[25] = 25
    size: OutputSize = Field(default_factory=OutputSize)


class TimelineDocument(_RenderModel):
    """Declarative composition: tracks in compositing order, track 0 being the base layer."""

    background: str = "#000000"
    tracks: Tuple[Track, ...]
    soundtrack: Optional[Soundtrack] = None
    output: OutputSpec = Field(default_factory=OutputSpec)

    def to_payload(self) -> Dict[str, Any]:
        """Serialize into the rendering engine's edit payload."""
        timeline: Dict[str, Any] = {
            "background": self.background,
            "tracks": [
                track.model_dump(mode="json", by_alias=True, exclude_none=True)
                for track in self.tracks
            ],
        }
        if self.soundtrack is not None:
            timeline["soundtrack"] = self.soundtrack.model_dump(
                mode="json", by_alias=True, exclude_none=True
            )
        return {
            "timeline": timeline,
            "output": self.output.model_dump(
                mode="json", include=OUTPUT_PAYLOAD_FIELDS, exclude_none=True
            ),
        }
