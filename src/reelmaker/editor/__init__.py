"""Composition editing: captions, styles, music, and timeline assembly."""

from .audio import (
    MUSIC_LIBRARY,
    MusicTrack,
    build_soundtrack,
    get_track,
    resolve_track_url,
)
from .captions import remove_caption, validate_and_insert
from .overlays import (
    DEFAULT_PRESET,
    PRESETS,
    StylePreset,
    banner_style,
    get_preset,
    title_asset,
)
from .timeline import build_timeline

__all__ = [
    # Audio
    "MUSIC_LIBRARY",
    "MusicTrack",
    "build_soundtrack",
    "get_track",
    "resolve_track_url",
    # Captions
    "remove_caption",
    "validate_and_insert",
    # Overlays
    "DEFAULT_PRESET",
    "PRESETS",
    "StylePreset",
    "banner_style",
    "get_preset",
    "title_asset",
    # Timeline
    "build_timeline",
]
