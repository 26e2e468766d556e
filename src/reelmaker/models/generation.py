"""Generation request models."""

from enum import Enum
from typing import Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from ..errors import InputValidationError

DEFAULT_MOTION_PROMPT = "Subtle natural movement, cinematic"


class AspectRatio(str, Enum):
    """Aspect ratios accepted by the generation provider."""

    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"
    SQUARE = "1:1"


class TextToVideo(BaseModel):
    """Generate a clip from a text prompt."""

    mode: Literal["text"] = "text"
    prompt: str = Field(..., description="Text description of the video")
    duration: Literal[5, 10] = Field(default=5, description="Clip length in seconds")
    aspect_ratio: AspectRatio = Field(default=AspectRatio.LANDSCAPE, description="Output aspect ratio")
    seed: Optional[int] = Field(None, description="Seed for reproducible output", ge=0)

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @field_validator("prompt")
    @classmethod
    def _prompt_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("prompt cannot be empty")
        return value.strip()


class ImageToVideo(BaseModel):
    """Animate a source image into a clip."""

    mode: Literal["image"] = "image"
    image_url: str = Field(..., description="URL of the source image")
    motion_prompt: Optional[str] = Field(None, description="Motion/animation description")
    duration: Literal[5, 10] = Field(default=5, description="Clip length in seconds")
    aspect_ratio: AspectRatio = Field(default=AspectRatio.LANDSCAPE, description="Output aspect ratio")
    seed: Optional[int] = Field(None, description="Seed for reproducible output", ge=0)

    class Config:
        """Pydantic config."""
        frozen = True
        extra = "forbid"

    @field_validator("image_url")
    @classmethod
    def _image_url_present(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("image_url is required")
        return value.strip()

    @property
    def effective_motion_prompt(self) -> str:
        """Motion prompt sent to the provider."""
        if self.motion_prompt and self.motion_prompt.strip():
            return self.motion_prompt.strip()
        return DEFAULT_MOTION_PROMPT


GenerationRequest = Union[TextToVideo, ImageToVideo]

RequestT = TypeVar("RequestT", TextToVideo, ImageToVideo)


def make_request(model: Type[RequestT], **fields) -> RequestT:
    """Build a generation request from caller input.

    Args:
        model: ``TextToVideo`` or ``ImageToVideo``.
        **fields: Request fields. Unknown names are rejected.

    Returns:
        The validated, immutable request.

    Raises:
        InputValidationError: If any field is missing, unknown, or out of range.
    """
    try:
        return model(**fields)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'request'}: {err['msg']}"
            for err in e.errors()
        )
        raise InputValidationError(f"Invalid {model.__name__} request: {problems}") from e
