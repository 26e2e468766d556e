"""CLI entry point for the reel maker."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

import typer

from . import __version__
from .config import config
from .errors import ConfigurationError, InputValidationError, SubmissionError
from .models import AspectRatio, AssetFailure, AssetSuccess, AssetTimedOut, CompositionJob
from .models.task import AssetResult, GenerationTask

app = typer.Typer(
    name="reel-maker",
    help="Generate short AI videos and compose them with music and captions",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"reel-maker version {__version__}")
        raise typer.Exit()


def show_progress(task: GenerationTask) -> None:
    """Echo a one-line progress update."""
    typer.echo(f"   ⏳ {task.status.value} ({task.progress:.0%}) - check {task.attempts}")


def report_result(result: AssetResult, label: str) -> None:
    """Echo an asset result, exiting non-zero unless it succeeded."""
    if isinstance(result, AssetSuccess):
        typer.echo(f"✅ {label} ready: {result.url}")
        return
    if isinstance(result, AssetTimedOut):
        typer.echo(f"⚠️  {label} still running after {result.attempts} checks (task {result.task_id})")
        typer.echo("   Poll again later or cancel it with 'reel-maker cancel'")
        raise typer.Exit(2)
    if isinstance(result, AssetFailure):
        typer.echo(f"❌ {label} failed: {result.reason}")
    raise typer.Exit(1)


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Reel Maker - Generate and compose short videos using AI."""
    pass


@app.command()
def generate(
    prompt: Optional[str] = typer.Argument(
        None,
        help="Text prompt, or the motion prompt when --image is given"
    ),
    image: Optional[str] = typer.Option(
        None,
        "--image",
        "-i",
        help="Source image URL to animate instead of generating from text"
    ),
    duration: int = typer.Option(
        5,
        "--duration",
        "-d",
        help="Clip duration in seconds (5 or 10)"
    ),
    aspect_ratio: AspectRatio = typer.Option(
        AspectRatio.PORTRAIT,
        "--aspect-ratio",
        "-a",
        help="Aspect ratio"
    ),
    seed: Optional[int] = typer.Option(
        None,
        "--seed",
        help="Seed for reproducible output"
    ),
    max_attempts: Optional[int] = typer.Option(
        None,
        "--max-attempts",
        help="Status checks before giving up",
        min=1
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Generate a video clip from a text prompt or a source image."""
    from .models.generation import ImageToVideo, TextToVideo, make_request
    from .services.runway import RunwayClient

    setup_logging(verbose)

    try:
        if image:
            request = make_request(
                ImageToVideo,
                image_url=image,
                motion_prompt=prompt,
                duration=duration,
                aspect_ratio=aspect_ratio,
                seed=seed,
            )
            typer.echo(f"🎬 Animating image: {image}")
        else:
            request = make_request(
                TextToVideo,
                prompt=prompt or "",
                duration=duration,
                aspect_ratio=aspect_ratio,
                seed=seed,
            )
            prompt_preview = request.prompt[:70] + "..." if len(request.prompt) > 70 else request.prompt
            typer.echo(f"🎬 Generating: {prompt_preview}")
    except InputValidationError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    try:
        config.validate_generation_required()
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    typer.echo(f"   Duration: {request.duration}s, aspect ratio: {request.aspect_ratio.value}")

    async def run() -> AssetResult:
        async with RunwayClient(max_attempts=max_attempts) as client:
            typer.echo(f"   Using model: {client.model}")
            if isinstance(request, ImageToVideo):
                return await client.submit_image_to_video(request, show_progress)
            return await client.submit_text_to_video(request, show_progress)

    try:
        result = asyncio.run(run())
    except SubmissionError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    report_result(result, "Video")


@app.command()
def compose(
    job: Path = typer.Option(
        Path("job.yaml"),
        "--job",
        "-j",
        help="Path to composition job YAML file",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the timeline document JSON to this path"
    ),
    render: bool = typer.Option(
        False,
        "--render",
        "-r",
        help="Submit the timeline for rendering and wait for the result"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
) -> None:
    """Build a timeline from a job file and optionally render it."""
    from .api import build_timeline
    from .services.shotstack import ShotstackClient

    setup_logging(verbose)
    typer.echo(f"📼 Composing from {job}")

    try:
        composition = CompositionJob.from_yaml(job)
    except Exception as e:
        typer.echo(f"❌ Error loading job: {e}")
        raise typer.Exit(1)

    try:
        document = build_timeline(
            composition.video_url,
            composition.duration,
            overlay_text=composition.overlay,
            music=composition.music,
            style=composition.caption_style,
        )
    except InputValidationError as e:
        typer.echo(f"❌ Invalid job: {e}")
        raise typer.Exit(1)

    captions = len(composition.overlay.captions) if composition.overlay else 0
    typer.echo(f"   Tracks: {len(document.tracks)}")
    typer.echo(f"   Captions: {captions}")
    typer.echo(f"   Music: {'yes' if document.soundtrack else 'none'}")

    payload = json.dumps(document.to_payload(), indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(payload)
        typer.echo(f"   Timeline saved: {output}")
    elif not render:
        typer.echo(payload)

    if not render:
        return

    try:
        config.validate_render_required()
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    async def run() -> AssetResult:
        async with ShotstackClient() as client:
            return await client.render(document, show_progress)

    typer.echo("   Rendering...")
    try:
        result = asyncio.run(run())
    except SubmissionError as e:
        typer.echo(f"❌ {e}")
        raise typer.Exit(1)

    report_result(result, "Render")


@app.command()
def styles() -> None:
    """List caption style presets."""
    from .editor.overlays import PRESETS

    typer.echo("🎨 Caption styles:")
    for name, preset in PRESETS.items():
        marker = " (default)" if name == config.caption_style else ""
        typer.echo(f"   • {name}{marker}: {preset.font_family} {preset.font_size_px}px, "
                   f"{preset.color}, {preset.anchor_position}")


@app.command()
def tracks() -> None:
    """List stock music tracks."""
    from .editor.audio import MUSIC_LIBRARY

    typer.echo("🎵 Stock music:")
    for track in MUSIC_LIBRARY.values():
        typer.echo(f"   • {track.id}: {track.name} ({track.category}, {track.duration:g}s, {track.bpm} bpm)")


@app.command()
def cancel(
    task_id: str = typer.Argument(
        ...,
        help="Generation task id"
    ),
) -> None:
    """Request cancellation of a generation task (best effort)."""
    from .services.runway import RunwayClient

    try:
        config.validate_generation_required()
    except ConfigurationError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    async def run() -> bool:
        async with RunwayClient() as client:
            return await client.cancel_task(task_id)

    cancelled = asyncio.run(run())

    if cancelled:
        typer.echo(f"✅ Cancellation requested for {task_id}")
    else:
        typer.echo(f"❌ Could not cancel {task_id}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
