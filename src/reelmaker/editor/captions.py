"""Caption validation and editing."""

import logging
import math
from typing import Optional, Union

from ..errors import CaptionRule, CaptionValidationError, InputValidationError
from ..models.captions import CaptionSegment, CaptionSet

logger = logging.getLogger(__name__)

TimeValue = Union[float, int, str]


def _parse_time(value: TimeValue) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def validate_and_insert(
    existing: CaptionSet,
    text: str,
    start: TimeValue,
    end: TimeValue,
    media_duration: Optional[float] = None,
) -> CaptionSet:
    """Validate a candidate caption and add it to a caption set.

    Checks run in a fixed order and the first failure is reported:
    text, numeric times, non-negative start, end after start, then the
    media duration bound when ``media_duration`` is known. Overlap with
    existing segments is allowed.

    Args:
        existing: Current captions.
        text: Caption text.
        start: Start time in seconds. Numeric strings are accepted.
        end: End time in seconds. Numeric strings are accepted.
        media_duration: Video duration in seconds, if known.

    Returns:
        A new caption set containing the segment, sorted by start time.

    Raises:
        CaptionValidationError: With the ``rule`` that failed.
        InputValidationError: If ``media_duration`` is given but is not a
            positive finite number.
    """
    if media_duration is not None:
        duration_s = _parse_time(media_duration)
        if duration_s is None or duration_s <= 0:
            raise InputValidationError(
                f"Video duration must be a positive number, got {media_duration}"
            )
        media_duration = duration_s

    if not isinstance(text, str) or not text.strip():
        raise CaptionValidationError(CaptionRule.TEXT_REQUIRED, "Caption text is required")

    start_s = _parse_time(start)
    end_s = _parse_time(end)
    if start_s is None or end_s is None:
        raise CaptionValidationError(
            CaptionRule.NOT_A_NUMBER, "Start and end times must be numbers"
        )

    if start_s < 0:
        raise CaptionValidationError(CaptionRule.NEGATIVE_START, "Start time cannot be negative")

    if end_s <= start_s:
        raise CaptionValidationError(
            CaptionRule.END_BEFORE_START, "End time must be after start time"
        )

    if media_duration is not None and (start_s > media_duration or end_s > media_duration):
        raise CaptionValidationError(
            CaptionRule.EXCEEDS_DURATION,
            f"Caption times cannot exceed video duration ({media_duration:g}s)",
        )

    segment = CaptionSegment(text=text, start=start_s, end=end_s)
    logger.debug(f"Adding caption {segment.id} [{start_s:g}s-{end_s:g}s]")
    return existing.with_segment(segment)


def remove_caption(captions: CaptionSet, caption_id: str) -> CaptionSet:
    """Remove a caption by id. Unknown ids leave the set unchanged."""
    return captions.without(caption_id)
