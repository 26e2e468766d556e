"""Timeline builder: turns a video and overlay intents into a render document."""

import logging
import math
from typing import List, Optional
from urllib.parse import urlparse

from ..errors import InputValidationError
from ..models.captions import CaptionSet
from ..models.overlay import MusicConfig, OverlayTextConfig
from ..models.timeline import Clip, TimelineDocument, Track, Transition, VideoAsset
from .audio import build_soundtrack
from .overlays import DEFAULT_PRESET, StylePreset, banner_style, get_preset, title_asset

logger = logging.getLogger(__name__)

FADE = "fade"


def build_timeline(
    video_url: str,
    duration: float,
    overlay_text: Optional[OverlayTextConfig] = None,
    music: Optional[MusicConfig] = None,
    caption_style: str = DEFAULT_PRESET,
) -> TimelineDocument:
    """Build the render document for one video.

    Track 0 holds the muted base video. A caption track follows when captions
    are present, then a banner track when banner text is set. Music becomes
    the soundtrack; without it there is no soundtrack entry.

    The result depends only on the arguments. All inputs are checked before
    anything is built, so a failed call produces no document at all.

    Args:
        video_url: URL of the source video.
        duration: Video duration in seconds.
        overlay_text: Banner text and captions, or None for no text.
        music: Background music, or None for no music.
        caption_style: Style preset name for captions and banner.

    Returns:
        The timeline document.

    Raises:
        InputValidationError: If any input is invalid.
    """
    if not video_url or not video_url.strip():
        raise InputValidationError("video_url is required")
    if urlparse(video_url.strip()).scheme not in ("http", "https"):
        raise InputValidationError(f"video_url must be an http(s) URL, got {video_url}")
    if not _is_positive_number(duration):
        raise InputValidationError(f"duration must be a positive number, got {duration}")

    preset = get_preset(caption_style)
    captions = overlay_text.captions if overlay_text is not None else CaptionSet()

    for segment in captions.segments:
        if segment.end > duration:
            raise InputValidationError(
                f"Caption '{segment.text[:20]}' ends at {segment.end:g}s, "
                f"past the video duration ({duration:g}s)"
            )

    tracks: List[Track] = [_video_track(video_url.strip(), duration)]

    if captions:
        tracks.append(_caption_track(captions, preset))

    if overlay_text is not None and overlay_text.has_banner:
        tracks.append(_banner_track(overlay_text.overlay_text.strip(), duration, preset))

    soundtrack = build_soundtrack(music) if music is not None else None

    logger.debug(
        f"Built timeline: {len(tracks)} tracks, {len(captions)} captions, "
        f"music={'yes' if soundtrack else 'no'}"
    )
    return TimelineDocument(tracks=tuple(tracks), soundtrack=soundtrack)


def _is_positive_number(value: float) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


def _video_track(video_url: str, duration: float) -> Track:
    clip = Clip(
        asset=VideoAsset(src=video_url, volume=0.0),
        start=0.0,
        length=float(duration),
        fit="cover",
        scale=1.0,
        position="center",
        transition=Transition(enter=FADE, exit=FADE),
    )
    return Track(clips=(clip,))


def _caption_track(captions: CaptionSet, preset: StylePreset) -> Track:
    segments = captions.segments
    last = len(segments) - 1
    clips = []

    for index, segment in enumerate(segments):
        transition = None
        if index == 0 or index == last:
            transition = Transition(
                enter=FADE if index == 0 else None,
                exit=FADE if index == last else None,
            )
        clips.append(
            Clip(
                asset=title_asset(segment.text, preset),
                start=float(segment.start),
                length=float(segment.length),
                transition=transition,
            )
        )

    return Track(clips=tuple(clips))


def _banner_track(text: str, duration: float, preset: StylePreset) -> Track:
    clip = Clip(
        asset=title_asset(text, banner_style(preset)),
        start=0.0,
        length=float(duration),
    )
    return Track(clips=(clip,))
