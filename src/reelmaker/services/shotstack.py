"""Shotstack rendering client."""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from ..config import config
from ..errors import ConfigurationError, InputValidationError, SubmissionError
from ..models.task import AssetResult, TaskSnapshot, TaskStatus
from ..models.timeline import TimelineDocument
from .base import ProgressCallback, TaskClient
from .poller import Sleep

logger = logging.getLogger(__name__)

STATUS_MAP = {
    "queued": TaskStatus.PENDING,
    "fetching": TaskStatus.RUNNING,
    "rendering": TaskStatus.RUNNING,
    "saving": TaskStatus.RUNNING,
    "done": TaskStatus.SUCCEEDED,
    "failed": TaskStatus.FAILED,
}

# Rough progress per stage; the engine does not report a fraction
STAGE_PROGRESS = {
    "queued": 0.0,
    "fetching": 0.1,
    "rendering": 0.5,
    "saving": 0.9,
    "done": 1.0,
}


class ShotstackClient(TaskClient):
    """Client that renders timeline documents into final videos."""

    provider_name = "Shotstack"

    def __init__(
        self,
        api_key: Optional[str] = None,
        host: Optional[str] = None,
        max_attempts: Optional[int] = None,
        interval_ms: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the Shotstack client.

        Args:
            api_key: Shotstack API key. Defaults to SHOTSTACK_API_KEY env var.
            host: API host, stage or v1. Defaults to SHOTSTACK_HOST env var.
            max_attempts: Status checks per render. Defaults to REELMAKER_POLL_MAX_ATTEMPTS.
            interval_ms: Milliseconds between checks. Defaults to REELMAKER_POLL_INTERVAL_MS.
            transport: Optional httpx transport override.
            sleep: Awaitable sleep used between status checks.

        Raises:
            ConfigurationError: If no API key is available.
        """
        self._api_key = api_key or config.shotstack_api_key
        if not self._api_key:
            raise ConfigurationError(
                "Shotstack API key not provided. Set SHOTSTACK_API_KEY env var."
            )

        super().__init__(
            base_url=host or config.shotstack_host,
            headers={
                "Content-Type": "application/json",
                "x-api-key": self._api_key,
            },
            max_attempts=config.poll_max_attempts if max_attempts is None else max_attempts,
            interval_ms=config.poll_interval_ms if interval_ms is None else interval_ms,
            transport=transport,
            sleep=sleep,
        )

    async def submit_render(self, document: TimelineDocument) -> str:
        """Submit a render job.

        Returns:
            The render job id.

        Raises:
            InputValidationError: If ``document`` is not a ``TimelineDocument``.
            SubmissionError: If the engine did not accept the job.
        """
        if not isinstance(document, TimelineDocument):
            raise InputValidationError("render requires a TimelineDocument")

        logger.info(f"Creating Shotstack render job ({len(document.tracks)} tracks)")
        data = await self._submit("/render", document.to_payload())

        job = data.get("response") if isinstance(data, dict) else None
        job_id = job.get("id") if isinstance(job, dict) else None
        if not job_id:
            logger.error(f"Shotstack returned no render id: {data}")
            raise SubmissionError(f"Shotstack submission returned no render id: {data}")

        logger.info(f"Render job submitted: {job_id}")
        return str(job_id)

    async def get_render_status(self, job_id: str) -> TaskSnapshot:
        """Fetch and adapt the current status of a render job.

        Raises:
            TransientTransportError: If the status call fails.
        """
        data = await self._fetch(f"/render/{job_id}")
        return parse_render_status(data.get("response") or {})

    async def render(
        self,
        document: TimelineDocument,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AssetResult:
        """Render a timeline: submit the job and poll until done.

        Returns:
            ``AssetSuccess`` with the final video URL, ``AssetFailure``, or ``AssetTimedOut``.
        """
        job_id = await self.submit_render(document)
        return await self._await_task(job_id, self.get_render_status, on_progress)


def parse_render_status(job: Dict[str, Any]) -> TaskSnapshot:
    """Adapt a Shotstack render document into a ``TaskSnapshot``."""
    raw_status = str(job.get("status", "")).lower()
    status = STATUS_MAP.get(raw_status, TaskStatus.RUNNING)
    progress = STAGE_PROGRESS.get(raw_status, 0.0)

    if status == TaskStatus.SUCCEEDED:
        url = job.get("url")
        if not url:
            # The URL can lag the status by one check
            return TaskSnapshot(status=TaskStatus.RUNNING, progress=0.9)
        return TaskSnapshot(status=status, progress=progress, result_url=url)

    if status == TaskStatus.FAILED:
        return TaskSnapshot(
            status=status,
            progress=progress,
            error_message=str(job.get("error") or "Render failed"),
        )

    return TaskSnapshot(status=status, progress=progress)
