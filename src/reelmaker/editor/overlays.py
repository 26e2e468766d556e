"""Caption and title style presets."""

from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Mapping, Optional

from ..errors import InputValidationError
from ..models.timeline import Offset, TitleAsset

ANCHOR_POSITIONS = ("top", "center", "bottom")


@dataclass(frozen=True)
class StylePreset:
    """Visual configuration for caption/title rendering."""

    font_family: str
    font_size_px: int
    color: str = "#ffffff"
    background_color: str = "transparent"
    anchor_position: str = "bottom"
    vertical_offset_fraction: float = 0.0
    shadow: bool = False
    outline_color: Optional[str] = None
    glow_color: Optional[str] = None

    def __post_init__(self) -> None:
        if self.anchor_position not in ANCHOR_POSITIONS:
            raise ValueError(
                f"Unknown anchor position: {self.anchor_position}. Available: {list(ANCHOR_POSITIONS)}"
            )
        if self.font_size_px <= 0:
            raise ValueError(f"font_size_px must be positive, got {self.font_size_px}")


# Preset styles
PRESETS: Mapping[str, StylePreset] = MappingProxyType({
    # Bold white with shadow and outline, sits above the bottom edge
    "bold-caption": StylePreset(
        font_family="Montserrat ExtraBold",
        font_size_px=44,
        anchor_position="bottom",
        vertical_offset_fraction=-0.15,
        shadow=True,
        outline_color="#000000",
    ),
    "clean-caption": StylePreset(
        font_family="Inter",
        font_size_px=32,
        anchor_position="bottom",
        vertical_offset_fraction=-0.12,
        shadow=True,
    ),
    "impact-caption": StylePreset(
        font_family="Bebas Neue",
        font_size_px=56,
        anchor_position="center",
        shadow=True,
        outline_color="#000000",
    ),
    "neon-caption": StylePreset(
        font_family="Montserrat ExtraBold",
        font_size_px=40,
        color="#00ffff",
        anchor_position="bottom",
        vertical_offset_fraction=-0.15,
        shadow=True,
        glow_color="#00ffff",
    ),
    # Yellow on a dark box
    "subtitle-caption": StylePreset(
        font_family="Arial",
        font_size_px=36,
        color="#f1c40f",
        background_color="rgba(0, 0, 0, 0.8)",
        anchor_position="bottom",
        vertical_offset_fraction=-0.08,
    ),
})

DEFAULT_PRESET = "bold-caption"

# Banner text sits near the top edge regardless of the caption anchor
BANNER_ANCHOR = "top"
BANNER_OFFSET_FRACTION = -0.08


def get_preset(name: str) -> StylePreset:
    """Get a style preset by name.

    Raises:
        InputValidationError: If the preset does not exist.
    """
    if name not in PRESETS:
        raise InputValidationError(f"Unknown caption style: {name}. Available: {list(PRESETS.keys())}")
    return PRESETS[name]


def banner_style(preset: StylePreset) -> StylePreset:
    """Derive the banner variant of a caption preset."""
    return replace(
        preset,
        anchor_position=BANNER_ANCHOR,
        vertical_offset_fraction=BANNER_OFFSET_FRACTION,
    )


def title_asset(text: str, preset: StylePreset) -> TitleAsset:
    """Build a title asset rendering ``text`` in ``preset``."""
    return TitleAsset(
        text=text,
        style=preset.font_family,
        size=f"{preset.font_size_px}px",
        color=preset.color,
        background=preset.background_color,
        position=preset.anchor_position,
        offset=Offset(x=0.0, y=preset.vertical_offset_fraction),
        shadow=preset.shadow,
        outline=preset.outline_color,
        glow=preset.glow_color,
    )
