"""Remote task state and asset results."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class TaskStatus(str, Enum):
    """Lifecycle of a remote generation or render task."""

    PENDING = "pending"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    TIMED_OUT = "timed_out"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskStatus.SUCCEEDED, TaskStatus.FAILED, TaskStatus.TIMED_OUT)


@dataclass(frozen=True)
class TaskSnapshot:
    """One observation of a remote task, adapted from the provider's status payload."""

    status: TaskStatus
    progress: float = 0.0
    result_url: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class GenerationTask:
    """A submitted task, owned by the call that created it.

    Only the polling loop moves it between states.
    """

    id: str
    status: TaskStatus = TaskStatus.PENDING
    progress: float = 0.0
    result_url: Optional[str] = None
    error_message: Optional[str] = None
    attempts: int = 0

    def apply(self, snapshot: TaskSnapshot) -> None:
        """Record the latest observed snapshot."""
        self.status = snapshot.status
        self.progress = min(1.0, max(0.0, snapshot.progress))
        self.result_url = snapshot.result_url
        self.error_message = snapshot.error_message


@dataclass(frozen=True)
class AssetSuccess:
    """The task produced an asset."""

    url: str
    task_id: str


@dataclass(frozen=True)
class AssetFailure:
    """The provider reported a terminal failure."""

    reason: str
    task_id: str


@dataclass(frozen=True)
class AssetTimedOut:
    """The polling budget ran out before the task reached a terminal state."""

    task_id: str
    attempts: int


AssetResult = Union[AssetSuccess, AssetFailure, AssetTimedOut]


def result_from_task(task: GenerationTask) -> AssetResult:
    """Convert a task in a terminal state into an ``AssetResult``."""
    if task.status == TaskStatus.SUCCEEDED and task.result_url:
        return AssetSuccess(url=task.result_url, task_id=task.id)
    if task.status == TaskStatus.TIMED_OUT:
        return AssetTimedOut(task_id=task.id, attempts=task.attempts)
    return AssetFailure(
        reason=task.error_message or "Task failed without a reason",
        task_id=task.id,
    )
