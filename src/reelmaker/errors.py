"""Error taxonomy for the generation and composition pipeline.

Only input and configuration problems are raised to callers. Provider-reported
failures and exhausted polling budgets come back as ``AssetResult`` values.
"""

from enum import Enum


class CaptionRule(str, Enum):
    """Caption checks, in the order they are applied."""

    TEXT_REQUIRED = "text_required"
    NOT_A_NUMBER = "not_a_number"
    NEGATIVE_START = "negative_start"
    END_BEFORE_START = "end_before_start"
    EXCEEDS_DURATION = "exceeds_duration"


class InputValidationError(ValueError):
    """Malformed local input, detected before any remote call."""


class CaptionValidationError(InputValidationError):
    """A candidate caption segment was rejected."""

    def __init__(self, rule: CaptionRule, message: str) -> None:
        super().__init__(message)
        self.rule = rule


class ConfigurationError(ValueError):
    """Required credentials or endpoints are missing."""


class SubmissionError(RuntimeError):
    """A submission call did not yield a task id."""


class TransientTransportError(RuntimeError):
    """A status check failed at the transport level and may be retried."""
