"""Background music: stock track library and soundtrack entries."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from ..models.overlay import MusicConfig, MusicSource
from ..models.timeline import Soundtrack

SOUNDTRACK_EFFECT = "fadeInFadeOut"

_LIBRARY_BASE = "https://res.cloudinary.com/ddvtwoyxp/video/upload/v1732800000/music"


@dataclass(frozen=True)
class MusicTrack:
    """A stock background track."""

    id: str
    name: str
    url: str
    category: str
    duration: float
    mood: str
    bpm: int


def _track(id: str, name: str, category: str, duration: float, mood: str, bpm: int) -> MusicTrack:
    return MusicTrack(
        id=id,
        name=name,
        url=f"{_LIBRARY_BASE}/{id}.mp3",
        category=category,
        duration=duration,
        mood=mood,
        bpm=bpm,
    )


MUSIC_LIBRARY: Mapping[str, MusicTrack] = MappingProxyType({
    track.id: track
    for track in (
        _track("energetic-beat", "Energetic Beat", "Upbeat", 30, "energetic", 120),
        _track("cinematic-ambient", "Cinematic Ambient", "Cinematic", 45, "dramatic", 80),
        _track("corporate-lofi", "Corporate Lo-Fi", "Business", 35, "professional", 90),
        _track("chill-vibes", "Chill Vibes", "Relaxed", 40, "calm", 70),
        _track("epic-trailer", "Epic Trailer", "Dramatic", 25, "epic", 140),
        _track("happy-upbeat", "Happy Upbeat", "Upbeat", 30, "happy", 110),
    )
})


def get_track(track_id: str) -> Optional[MusicTrack]:
    """Look up a stock track by id."""
    return MUSIC_LIBRARY.get(track_id)


def resolve_track_url(music: MusicConfig) -> str:
    """Resolve the source reference handed to the rendering engine.

    Preset configs may name a stock track by id; anything else, including
    uploaded file references, is passed through unchanged.
    """
    if music.source_kind == MusicSource.PRESET:
        track = get_track(music.track_ref)
        if track is not None:
            return track.url
    return music.track_ref


def build_soundtrack(music: MusicConfig) -> Soundtrack:
    """Build the soundtrack entry for ``music`` with a fade in/out envelope."""
    return Soundtrack(
        src=resolve_track_url(music),
        effect=SOUNDTRACK_EFFECT,
        volume=music.volume,
    )
