from __future__ import annotations

import asyncio

import httpx
import pytest

from reelmaker import api
from reelmaker.config import config
from reelmaker.errors import ConfigurationError, InputValidationError, SubmissionError
from reelmaker.models import AssetFailure, AssetSuccess, AssetTimedOut, TaskStatus, TextToVideo
from reelmaker.models.generation import DEFAULT_MOTION_PROMPT, ImageToVideo
from reelmaker.services.runway import RunwayClient, parse_task_status
from tests.conftest import FakeProvider, no_sleep, sequence

BASE = "https://runway.test/v1"
VIDEO_URL = "https://cdn.test/generated.mp4"


def _status(status, **extra):
    return httpx.Response(200, json={"id": "task-1", "status": status, **extra})


def _client(provider, **kwargs):
    kwargs.setdefault("max_attempts", 5)
    return RunwayClient(
        api_key="rk-test",
        api_base=BASE,
        model="gen3a_turbo",
        interval_ms=0,
        transport=provider.transport,
        sleep=no_sleep,
        **kwargs,
    )


def _run(provider, coro_factory, **kwargs):
    async def go():
        async with _client(provider, **kwargs) as client:
            return await coro_factory(client)

    return asyncio.run(go())


def test_text_to_video_succeeds():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(
            _status("PENDING"),
            _status("RUNNING", progress=0.5),
            _status("SUCCEEDED", output=[VIDEO_URL]),
        ),
    })
    request = TextToVideo(prompt="a fox in the snow", duration=10, aspect_ratio="9:16", seed=42)

    result = _run(provider, lambda c: c.submit_text_to_video(request))

    assert result == AssetSuccess(url=VIDEO_URL, task_id="task-1")
    assert provider.sent_json(0) == {
        "model": "gen3a_turbo",
        "promptText": "a fox in the snow",
        "duration": 10,
        "ratio": "9:16",
        "watermark": False,
        "seed": 42,
    }
    submit = provider.requests[0]
    assert submit.headers["Authorization"] == "Bearer rk-test"
    assert submit.headers["X-Runway-Version"] == RunwayClient.API_VERSION


def test_image_to_video_uses_default_motion_prompt():
    provider = FakeProvider({
        "POST /v1/image-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(_status("SUCCEEDED", output=[VIDEO_URL])),
    })
    request = ImageToVideo(image_url="https://img.test/cat.png")

    result = _run(provider, lambda c: c.submit_image_to_video(request))

    assert isinstance(result, AssetSuccess)
    sent = provider.sent_json(0)
    assert sent["promptImage"] == "https://img.test/cat.png"
    assert sent["promptText"] == DEFAULT_MOTION_PROMPT
    assert "seed" not in sent


def test_provider_failure_is_returned_not_raised():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(_status("RUNNING"), _status("FAILED", failure="SAFETY.INPUT.TEXT")),
    })
    request = TextToVideo(prompt="something")

    result = _run(provider, lambda c: c.submit_text_to_video(request))

    assert result == AssetFailure(reason="SAFETY.INPUT.TEXT", task_id="task-1")


def test_exhausted_budget_is_timed_out():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(_status("RUNNING", progress=0.2)),
    })
    request = TextToVideo(prompt="slow one")

    result = _run(provider, lambda c: c.submit_text_to_video(request), max_attempts=3)

    assert result == AssetTimedOut(task_id="task-1", attempts=3)
    assert len(provider.requests) == 1 + 3


def test_status_errors_are_retried():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(
            httpx.Response(502, text="bad gateway"),
            _status("RUNNING"),
            httpx.Response(500, text="oops"),
            _status("SUCCEEDED", output=[VIDEO_URL]),
        ),
    })

    result = _run(provider, lambda c: c.submit_text_to_video(TextToVideo(prompt="retry me")))

    assert isinstance(result, AssetSuccess)


def test_progress_callback_receives_task_updates():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(_status("RUNNING", progress=0.25), _status("SUCCEEDED", output=[VIDEO_URL])),
    })
    seen = []

    _run(
        provider,
        lambda c: c.submit_text_to_video(
            TextToVideo(prompt="watch me"),
            on_progress=lambda task: seen.append((task.attempts, task.status, task.progress)),
        ),
    )

    assert seen == [(1, TaskStatus.RUNNING, 0.25), (2, TaskStatus.SUCCEEDED, 1.0)]


def test_rejected_submission_raises():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(401, json={"error": "Invalid API key"})),
    })

    with pytest.raises(SubmissionError, match="HTTP 401"):
        _run(provider, lambda c: c.submit_text_to_video(TextToVideo(prompt="hi")))


def test_submission_without_task_id_raises():
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"status": "queued"})),
    })

    with pytest.raises(SubmissionError, match="no task id"):
        _run(provider, lambda c: c.submit_text_to_video(TextToVideo(prompt="hi")))


@pytest.mark.parametrize(
    "fields",
    [
        {"prompt": "   "},
        {"prompt": "ok", "duration": 7},
        {"prompt": "ok", "aspect_ratio": "4:3"},
    ],
)
def test_invalid_text_requests_never_reach_provider(fields):
    provider = FakeProvider({})

    async def go():
        async with _client(provider) as client:
            await api.generate_from_text(client=client, **fields)

    with pytest.raises(InputValidationError):
        asyncio.run(go())
    assert provider.requests == []


def test_image_request_requires_url():
    provider = FakeProvider({})

    async def go():
        async with _client(provider) as client:
            await api.generate_from_image("", "zoom in", client=client)

    with pytest.raises(InputValidationError, match="image_url"):
        asyncio.run(go())
    assert provider.requests == []


def test_wrong_request_type_is_rejected():
    provider = FakeProvider({})

    with pytest.raises(InputValidationError):
        _run(provider, lambda c: c.submit_text_to_video(ImageToVideo(image_url="https://img.test/a.png")))


def test_generate_from_image_via_api():
    provider = FakeProvider({
        "POST /v1/image-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(_status("SUCCEEDED", output=[VIDEO_URL])),
    })

    async def go():
        async with _client(provider) as client:
            return await api.generate_from_image(
                "https://img.test/a.png", "slow pan", duration=10, aspect_ratio="1:1", client=client
            )

    result = asyncio.run(go())

    assert isinstance(result, AssetSuccess)
    assert provider.sent_json(0)["promptText"] == "slow pan"
    assert provider.sent_json(0)["ratio"] == "1:1"


def test_concurrent_generations_do_not_share_state():
    ids = iter(["task-a", "task-b"])
    provider = FakeProvider({
        "POST /v1/text-to-video": lambda _req: httpx.Response(200, json={"id": next(ids)}),
        "GET /v1/tasks/task-a": sequence(_status("SUCCEEDED", output=["https://cdn.test/a.mp4"])),
        "GET /v1/tasks/task-b": sequence(_status("RUNNING"), _status("FAILED", failure="out of credits")),
    })

    async def go():
        async with _client(provider) as client:
            return await asyncio.gather(
                client.submit_text_to_video(TextToVideo(prompt="one")),
                client.submit_text_to_video(TextToVideo(prompt="two")),
            )

    results = asyncio.run(go())

    assert AssetSuccess(url="https://cdn.test/a.mp4", task_id="task-a") in results
    assert AssetFailure(reason="out of credits", task_id="task-b") in results


def test_cancel_is_best_effort():
    provider = FakeProvider({
        "DELETE /v1/tasks/task-1": sequence(httpx.Response(204)),
    })

    assert _run(provider, lambda c: c.cancel_task("task-1")) is True
    assert _run(provider, lambda c: c.cancel_task("unknown")) is False


def test_missing_api_key_raises(monkeypatch):
    monkeypatch.setattr(config, "runway_api_key", "")

    with pytest.raises(ConfigurationError):
        RunwayClient()


@pytest.mark.parametrize(
    "payload,status,url,error",
    [
        ({"status": "THROTTLED"}, TaskStatus.PENDING, None, None),
        ({"status": "RUNNING", "progress": "0.7"}, TaskStatus.RUNNING, None, None),
        ({"status": "SUCCEEDED", "output": []}, TaskStatus.FAILED, None, "Runway reported success without an output asset"),
        ({"status": "CANCELLED"}, TaskStatus.FAILED, None, "Task was cancelled"),
        ({"status": "FAILED"}, TaskStatus.FAILED, None, "Video generation failed"),
        ({"status": "SOMETHING_NEW"}, TaskStatus.RUNNING, None, None),
    ],
)
def test_status_mapping(payload, status, url, error):
    snapshot = parse_task_status(payload)

    assert snapshot.status == status
    assert snapshot.result_url == url
    assert snapshot.error_message == error


def test_explicit_attempt_budget_is_not_replaced(monkeypatch):
    monkeypatch.setattr(config, "poll_max_attempts", 9)
    provider = FakeProvider({
        "POST /v1/text-to-video": sequence(httpx.Response(200, json={"id": "task-1"})),
        "GET /v1/tasks/task-1": sequence(_status("RUNNING")),
    })

    result = _run(provider, lambda c: c.submit_text_to_video(TextToVideo(prompt="a red balloon")), max_attempts=1)

    assert isinstance(result, AssetTimedOut)
    assert result.attempts == 1


def test_zero_attempt_budget_is_rejected():
    with pytest.raises(ValueError, match="max_attempts"):
        RunwayClient(api_key="rk-test", max_attempts=0)
