"""Entry points for callers outside the pipeline (web handlers, CLI, jobs).

Generation and rendering calls accept an optional client. When omitted, a
client is built from configuration and closed when the call returns.
"""

from typing import Optional, Union

from .config import config
from .editor.captions import remove_caption as _remove_caption
from .editor.captions import validate_and_insert
from .editor.timeline import build_timeline as _build_timeline
from .models.captions import CaptionSet
from .models.generation import AspectRatio, ImageToVideo, TextToVideo, make_request
from .models.overlay import MusicConfig, OverlayTextConfig
from .models.task import AssetResult
from .models.timeline import TimelineDocument
from .services.base import ProgressCallback
from .services.runway import RunwayClient
from .services.shotstack import ShotstackClient

TimeValue = Union[float, int, str]


async def generate_from_text(
    prompt: str,
    duration: int = 5,
    aspect_ratio: Union[AspectRatio, str] = AspectRatio.LANDSCAPE,
    seed: Optional[int] = None,
    client: Optional[RunwayClient] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> AssetResult:
    """Generate a video from a text prompt.

    Raises:
        InputValidationError: If the prompt or options are invalid.
        SubmissionError: If the provider did not accept the request.
    """
    request = make_request(
        TextToVideo, prompt=prompt, duration=duration, aspect_ratio=aspect_ratio, seed=seed
    )
    if client is not None:
        return await client.submit_text_to_video(request, on_progress)
    async with RunwayClient() as owned:
        return await owned.submit_text_to_video(request, on_progress)


async def generate_from_image(
    image_url: str,
    motion_prompt: Optional[str] = None,
    duration: int = 5,
    aspect_ratio: Union[AspectRatio, str] = AspectRatio.LANDSCAPE,
    seed: Optional[int] = None,
    client: Optional[RunwayClient] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> AssetResult:
    """Animate a source image into a video.

    Raises:
        InputValidationError: If the image URL or options are invalid.
        SubmissionError: If the provider did not accept the request.
    """
    request = make_request(
        ImageToVideo,
        image_url=image_url,
        motion_prompt=motion_prompt,
        duration=duration,
        aspect_ratio=aspect_ratio,
        seed=seed,
    )
    if client is not None:
        return await client.submit_image_to_video(request, on_progress)
    async with RunwayClient() as owned:
        return await owned.submit_image_to_video(request, on_progress)


def add_caption(
    captions: CaptionSet,
    text: str,
    start: TimeValue,
    end: TimeValue,
    duration: Optional[float] = None,
) -> CaptionSet:
    """Validate a caption and return the set with it added."""
    return validate_and_insert(captions, text, start, end, duration)


def remove_caption(captions: CaptionSet, caption_id: str) -> CaptionSet:
    """Return the set without the caption ``caption_id``."""
    return _remove_caption(captions, caption_id)


def build_timeline(
    video_url: str,
    duration: float,
    overlay_text: Optional[OverlayTextConfig] = None,
    music: Optional[MusicConfig] = None,
    style: Optional[str] = None,
) -> TimelineDocument:
    """Build the render document. ``style`` defaults to REELMAKER_CAPTION_STYLE."""
    return _build_timeline(
        video_url,
        duration,
        overlay_text=overlay_text,
        music=music,
        caption_style=style or config.caption_style,
    )


async def render_timeline(
    document: TimelineDocument,
    client: Optional[ShotstackClient] = None,
    on_progress: Optional[ProgressCallback] = None,
) -> AssetResult:
    """Render a timeline document into the final video.

    Raises:
        SubmissionError: If the engine did not accept the job.
    """
    if client is not None:
        return await client.render(document, on_progress)
    async with ShotstackClient() as owned:
        return await owned.render(document, on_progress)
