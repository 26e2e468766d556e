from __future__ import annotations

import json

from typer.testing import CliRunner

from reelmaker import __version__
from reelmaker.cli import app
from reelmaker.editor.overlays import PRESETS

runner = CliRunner()

JOB = (
    "video_url: https://cdn.test/source.mp4\n"
    "duration: 6\n"
    "overlay:\n"
    "  overlay_text: ''\n"
    "  captions:\n"
    "    segments:\n"
    "      - {text: hi, start: 0, end: 2}\n"
    "      - {text: bye, start: 3, end: 5}\n"
    "music:\n"
    "  track_ref: chill-vibes\n"
    "  volume: 0.5\n"
)


def test_version():
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_styles_lists_every_preset():
    result = runner.invoke(app, ["styles"])

    assert result.exit_code == 0
    for name in PRESETS:
        assert name in result.output


def test_tracks_lists_library():
    result = runner.invoke(app, ["tracks"])

    assert result.exit_code == 0
    assert "chill-vibes" in result.output


def test_compose_writes_timeline(tmp_path):
    job = tmp_path / "job.yaml"
    job.write_text(JOB)
    out = tmp_path / "out" / "timeline.json"

    result = runner.invoke(app, ["compose", "--job", str(job), "--output", str(out)])

    assert result.exit_code == 0, result.output
    payload = json.loads(out.read_text())
    assert len(payload["timeline"]["tracks"]) == 2
    assert payload["timeline"]["soundtrack"]["volume"] == 0.5
    assert payload["output"]["size"] == {"width": 1080, "height": 1920}


def test_compose_rejects_captions_past_duration(tmp_path):
    job = tmp_path / "job.yaml"
    job.write_text(JOB.replace("duration: 6", "duration: 4"))

    result = runner.invoke(app, ["compose", "--job", str(job)])

    assert result.exit_code == 1
    assert "Invalid job" in result.output


def test_compose_rejects_unknown_fields(tmp_path):
    job = tmp_path / "job.yaml"
    job.write_text(JOB + "resolution: 4k\n")

    result = runner.invoke(app, ["compose", "--job", str(job)])

    assert result.exit_code == 1
    assert "Error loading job" in result.output


def test_generate_requires_prompt():
    result = runner.invoke(app, ["generate"])

    assert result.exit_code == 1
    assert "prompt" in result.output


def test_generate_rejects_unsupported_duration():
    result = runner.invoke(app, ["generate", "a red balloon", "--duration", "7"])

    assert result.exit_code == 1
    assert "duration" in result.output


def test_generate_requires_runway_key(monkeypatch):
    from reelmaker.config import config

    monkeypatch.setattr(config, "runway_api_key", "")

    result = runner.invoke(app, ["generate", "a red balloon"])

    assert result.exit_code == 1
    assert "RUNWAY_API_KEY" in result.output


def test_cancel_requires_runway_key(monkeypatch):
    from reelmaker.config import config

    monkeypatch.setattr(config, "runway_api_key", "")

    result = runner.invoke(app, ["cancel", "task-1"])

    assert result.exit_code == 1
    assert "Configuration error" in result.output


def test_compose_render_requires_shotstack_key(monkeypatch, tmp_path):
    from reelmaker.config import config

    monkeypatch.setattr(config, "shotstack_api_key", "")
    job = tmp_path / "job.yaml"
    job.write_text(JOB)

    result = runner.invoke(app, ["compose", "--job", str(job), "--render"])

    assert result.exit_code == 1
    assert "SHOTSTACK_API_KEY" in result.output
