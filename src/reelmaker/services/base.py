"""Shared plumbing for clients of long-running remote tasks."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from ..errors import SubmissionError, TransientTransportError
from ..models.task import (
    AssetResult,
    GenerationTask,
    TaskSnapshot,
    TaskStatus,
    result_from_task,
)
from .poller import Sleep, poll_task

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[GenerationTask], None]


class TaskClient:
    """Base class for clients that submit a task and poll it to completion.

    Subclasses implement the provider's submission and status calls. Each client
    owns its own HTTP connection pool and holds no per-task state, so one
    instance can serve concurrent submissions.
    """

    provider_name = "provider"

    def __init__(
        self,
        base_url: str,
        headers: Dict[str, str],
        max_attempts: int,
        interval_ms: int,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        """Initialize the client.

        Args:
            base_url: Provider API base URL.
            headers: Headers sent with every request (auth, versioning).
            max_attempts: Status checks per task before giving up.
            interval_ms: Milliseconds between status checks.
            timeout: Per-request timeout in seconds.
            transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
            sleep: Awaitable sleep used between status checks.

        Raises:
            ValueError: If the polling budget is invalid.
        """
        if max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {max_attempts}")
        if interval_ms < 0:
            raise ValueError(f"interval_ms must not be negative, got {interval_ms}")

        self._max_attempts = max_attempts
        self._interval_ms = interval_ms
        self._sleep = sleep
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def __aenter__(self) -> "TaskClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying HTTP connections."""
        await self._http.aclose()

    async def _submit(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """POST a submission and return the decoded body.

        Raises:
            SubmissionError: If the request fails or the body is not JSON.
        """
        try:
            response = await self._http.post(path, json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"{self.provider_name} rejected submission to {path}: "
                f"{e.response.status_code} {e.response.text[:200]}"
            )
            raise SubmissionError(
                f"{self.provider_name} submission failed with HTTP {e.response.status_code}"
            ) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"{self.provider_name} submission to {path} failed: {e}")
            raise SubmissionError(f"{self.provider_name} submission failed: {e}") from e

    async def _fetch(self, path: str) -> Dict[str, Any]:
        """GET a status document.

        Raises:
            TransientTransportError: On any transport, HTTP, or decoding failure.
        """
        try:
            response = await self._http.get(path)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise TransientTransportError(f"{self.provider_name} status check failed: {e}") from e

    async def _await_task(
        self,
        task_id: str,
        fetch_status: Callable[[str], Awaitable[TaskSnapshot]],
        on_progress: Optional[ProgressCallback] = None,
    ) -> AssetResult:
        """Poll ``task_id`` to a terminal state and convert it to an ``AssetResult``."""
        task = GenerationTask(id=task_id)

        def record(attempt: int, snapshot: TaskSnapshot) -> None:
            task.attempts = attempt
            task.apply(snapshot)
            if on_progress is not None:
                on_progress(task)

        final = await poll_task(
            lambda: fetch_status(task_id),
            max_attempts=self._max_attempts,
            interval_ms=self._interval_ms,
            on_snapshot=record,
            sleep=self._sleep,
        )
        if final.status == TaskStatus.TIMED_OUT:
            task.attempts = self._max_attempts
        task.apply(final)

        result = result_from_task(task)
        logger.info(f"{self.provider_name} task {task_id} finished: {task.status.value}")
        return result
