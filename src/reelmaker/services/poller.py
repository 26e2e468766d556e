"""Bounded polling over a remote task handle."""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from ..models.task import TaskSnapshot, TaskStatus

logger = logging.getLogger(__name__)

# 120 attempts x 5s = 10 minutes
DEFAULT_MAX_ATTEMPTS = 120
DEFAULT_INTERVAL_MS = 5000

FetchStatus = Callable[[], Awaitable[TaskSnapshot]]
SnapshotCallback = Callable[[int, TaskSnapshot], None]
Sleep = Callable[[float], Awaitable[None]]


async def poll_task(
    fetch_status: FetchStatus,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    interval_ms: int = DEFAULT_INTERVAL_MS,
    on_snapshot: Optional[SnapshotCallback] = None,
    sleep: Sleep = asyncio.sleep,
) -> TaskSnapshot:
    """Poll a task until it reaches a terminal state or the attempt budget runs out.

    Errors raised by ``fetch_status`` consume an attempt but do not abort the loop.
    The coroutine yields during every wait, so many polls can share one event loop.
    There is no wall-clock deadline: callers needing one should derive
    ``max_attempts`` from it and ``interval_ms``.

    Args:
        fetch_status: Coroutine function returning the task's current snapshot.
        max_attempts: Maximum number of status checks.
        interval_ms: Milliseconds to wait between checks.
        on_snapshot: Called with the attempt number and each snapshot received.
        sleep: Awaitable sleep, in seconds.

    Returns:
        The terminal snapshot. ``TaskStatus.TIMED_OUT`` if the budget was exhausted.
    """
    if max_attempts < 1:
        raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
    if interval_ms < 0:
        raise ValueError(f"interval_ms cannot be negative, got {interval_ms}")

    last_progress = 0.0

    for attempt in range(1, max_attempts + 1):
        try:
            snapshot = await fetch_status()
        except Exception as e:
            logger.warning(f"Status check failed (attempt {attempt}/{max_attempts}): {e}")
        else:
            last_progress = snapshot.progress
            logger.debug(
                f"Attempt {attempt}/{max_attempts}: {snapshot.status.value} "
                f"({snapshot.progress:.0%})"
            )
            if on_snapshot is not None:
                on_snapshot(attempt, snapshot)
            if snapshot.status.is_terminal:
                return snapshot

        if attempt < max_attempts:
            await sleep(interval_ms / 1000)

    logger.warning(f"Task still not finished after {max_attempts} attempts")
    return TaskSnapshot(
        status=TaskStatus.TIMED_OUT,
        progress=last_progress,
        error_message=f"Timed out after {max_attempts} attempts",
    )
