"""Runway video generation client."""

import asyncio
import logging
from typing import Any, Dict, Optional

import httpx

from ..config import config
from ..errors import ConfigurationError, InputValidationError, SubmissionError
from ..models.generation import ImageToVideo, TextToVideo
from ..models.task import AssetResult, TaskSnapshot, TaskStatus
from .base import ProgressCallback, TaskClient
from .poller import Sleep

logger = logging.getLogger(__name__)

# Provider status -> task status
STATUS_MAP = {
    "PENDING": TaskStatus.PENDING,
    "THROTTLED": TaskStatus.PENDING,
    "RUNNING": TaskStatus.RUNNING,
    "SUCCEEDED": TaskStatus.SUCCEEDED,
    "FAILED": TaskStatus.FAILED,
    "CANCELLED": TaskStatus.FAILED,
}


class RunwayClient(TaskClient):
    """Client for Runway text-to-video and image-to-video generation.

    This client handles:
    - Submitting generation requests and obtaining a task id
    - Polling the task until it succeeds, fails, or the attempt budget runs out
    - Best-effort cancellation of in-flight tasks

    Provider-reported failures and timeouts are returned as ``AssetResult``
    values. Only invalid input, missing credentials, and failed submissions raise.
    """

    API_VERSION = "2024-11-06"

    provider_name = "Runway"

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_base: Optional[str] = None,
        model: Optional[str] = None,
        max_attempts: Optional[int] = None,
        interval_ms: Optional[int] = None,
        watermark: bool = False,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the Runway client.

        Args:
            api_key: Runway API key. Defaults to RUNWAY_API_KEY env var.
            api_base: API base URL. Defaults to RUNWAY_API_BASE env var.
            model: Generation model. Defaults to RUNWAY_MODEL env var.
            max_attempts: Status checks per task. Defaults to REELMAKER_POLL_MAX_ATTEMPTS.
            interval_ms: Milliseconds between checks. Defaults to REELMAKER_POLL_INTERVAL_MS.
            watermark: Whether the provider should watermark output.
            transport: Optional httpx transport override.
            sleep: Awaitable sleep used between status checks.

        Raises:
            ConfigurationError: If no API key is available.
        """
        self._api_key = api_key or config.runway_api_key
        if not self._api_key:
            raise ConfigurationError(
                "Runway API key not provided. Set RUNWAY_API_KEY env var."
            )

        self._model = model or config.runway_model
        self._watermark = watermark

        super().__init__(
            base_url=api_base or config.runway_api_base,
            headers={
                "Authorization": f"Bearer {self._api_key}",
                "Content-Type": "application/json",
                "X-Runway-Version": self.API_VERSION,
            },
            max_attempts=config.poll_max_attempts if max_attempts is None else max_attempts,
            interval_ms=config.poll_interval_ms if interval_ms is None else interval_ms,
            transport=transport,
            sleep=sleep,
        )

    @property
    def model(self) -> str:
        """Return the generation model being used."""
        return self._model

    async def submit_text_to_video(
        self,
        request: TextToVideo,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AssetResult:
        """Generate a video from a text prompt.

        Args:
            request: Validated text-to-video request.
            on_progress: Called with the task after every successful status check.

        Returns:
            ``AssetSuccess`` with the video URL, ``AssetFailure``, or ``AssetTimedOut``.

        Raises:
            InputValidationError: If ``request`` is not a ``TextToVideo``.
            SubmissionError: If the provider did not accept the request.
        """
        if not isinstance(request, TextToVideo):
            raise InputValidationError("submit_text_to_video requires a TextToVideo request")

        logger.info(f"Starting Runway text-to-video generation ({request.duration}s, {request.aspect_ratio.value})")
        logger.debug(f"Prompt: {request.prompt[:100]}")

        payload = self._base_payload(request)
        payload["promptText"] = request.prompt

        task_id = await self._create_task("/text-to-video", payload)
        return await self._await_task(task_id, self.get_task, on_progress)

    async def submit_image_to_video(
        self,
        request: ImageToVideo,
        on_progress: Optional[ProgressCallback] = None,
    ) -> AssetResult:
        """Animate a source image into a video.

        Args:
            request: Validated image-to-video request.
            on_progress: Called with the task after every successful status check.

        Returns:
            ``AssetSuccess`` with the video URL, ``AssetFailure``, or ``AssetTimedOut``.

        Raises:
            InputValidationError: If ``request`` is not an ``ImageToVideo``.
            SubmissionError: If the provider did not accept the request.
        """
        if not isinstance(request, ImageToVideo):
            raise InputValidationError("submit_image_to_video requires an ImageToVideo request")

        logger.info(f"Starting Runway image-to-video generation from {request.image_url}")

        payload = self._base_payload(request)
        payload["promptImage"] = request.image_url
        payload["promptText"] = request.effective_motion_prompt

        task_id = await self._create_task("/image-to-video", payload)
        return await self._await_task(task_id, self.get_task, on_progress)

    async def get_task(self, task_id: str) -> TaskSnapshot:
        """Fetch and adapt the current status of a task.

        Raises:
            TransientTransportError: If the status call fails.
        """
        data = await self._fetch(f"/tasks/{task_id}")
        return parse_task_status(data)

    async def cancel_task(self, task_id: str) -> bool:
        """Request cancellation of a task.

        Best effort: the provider may still finish the work.

        Returns:
            True if the provider acknowledged the request.
        """
        try:
            logger.info(f"Cancelling Runway task: {task_id}")
            response = await self._http.delete(f"/tasks/{task_id}")
            response.raise_for_status()
            return True
        except httpx.HTTPError as e:
            logger.error(f"Failed to cancel task {task_id}: {e}")
            return False

    def _base_payload(self, request: Any) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self._model,
            "duration": request.duration,
            "ratio": request.aspect_ratio.value,
            "watermark": self._watermark,
        }
        if request.seed is not None:
            payload["seed"] = request.seed
        return payload

    async def _create_task(self, path: str, payload: Dict[str, Any]) -> str:
        data = await self._submit(path, payload)
        task_id = data.get("id") if isinstance(data, dict) else None
        if not task_id:
            logger.error(f"Runway returned no task id: {data}")
            raise SubmissionError(f"Runway submission returned no task id: {data}")
        logger.info(f"Runway task created: {task_id}")
        return str(task_id)


def parse_task_status(data: Dict[str, Any]) -> TaskSnapshot:
    """Adapt a Runway task document into a ``TaskSnapshot``."""
    raw_status = str(data.get("status", "")).upper()
    status = STATUS_MAP.get(raw_status)
    if status is None:
        logger.debug(f"Unrecognized Runway status {raw_status!r}, treating as running")
        status = TaskStatus.RUNNING

    progress = data.get("progress") or 0.0
    try:
        progress = float(progress)
    except (TypeError, ValueError):
        progress = 0.0

    if status == TaskStatus.SUCCEEDED:
        output = data.get("output") or []
        url = output[0] if isinstance(output, list) and output else output
        if not url or not isinstance(url, str):
            return TaskSnapshot(
                status=TaskStatus.FAILED,
                progress=progress,
                error_message="Runway reported success without an output asset",
            )
        return TaskSnapshot(status=status, progress=1.0, result_url=url)

    if status == TaskStatus.FAILED:
        if raw_status == "CANCELLED":
            reason = data.get("failure") or "Task was cancelled"
        else:
            reason = data.get("failure") or "Video generation failed"
        return TaskSnapshot(status=status, progress=progress, error_message=str(reason))

    return TaskSnapshot(status=status, progress=progress)
