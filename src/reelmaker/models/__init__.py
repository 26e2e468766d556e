"""Data models for the reel generation pipeline."""

from .captions import CaptionSegment, CaptionSet
from .generation import AspectRatio, GenerationRequest, ImageToVideo, TextToVideo, make_request
from .job import CompositionJob
from .overlay import MusicConfig, MusicSource, OverlayTextConfig
from .task import (
    AssetFailure,
    AssetResult,
    AssetSuccess,
    AssetTimedOut,
    GenerationTask,
    TaskSnapshot,
    TaskStatus,
)
from .timeline import (
    AudioAsset,
    Clip,
    Offset,
    OutputSpec,
    Soundtrack,
    TimelineDocument,
    TitleAsset,
    Track,
    Transition,
    VideoAsset,
)

__all__ = [
    "CaptionSegment",
    "CaptionSet",
    "AspectRatio",
    "GenerationRequest",
    "ImageToVideo",
    "TextToVideo",
    "make_request",
    "CompositionJob",
    "MusicConfig",
    "MusicSource",
    "OverlayTextConfig",
    "AssetFailure",
    "AssetResult",
    "AssetSuccess",
    "AssetTimedOut",
    "GenerationTask",
    "TaskSnapshot",
    "TaskStatus",
    "AudioAsset",
    "Clip",
    "Offset",
    "OutputSpec",
    "Soundtrack",
    "TimelineDocument",
    "TitleAsset",
    "Track",
    "Transition",
    "VideoAsset",
]
