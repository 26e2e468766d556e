"""External service integrations."""

from .poller import DEFAULT_INTERVAL_MS, DEFAULT_MAX_ATTEMPTS, poll_task
from .runway import RunwayClient
from .shotstack import ShotstackClient

__all__ = [
    "DEFAULT_INTERVAL_MS",
    "DEFAULT_MAX_ATTEMPTS",
    "poll_task",
    "RunwayClient",
    "ShotstackClient",
]
