# SPDX-License-Identifier: MIT
"""Subtitle generation from local audio/video with whisper.cpp."""

import pathlib

from ..catalog import notify_catalog
from ..config import Settings, logger
from ..storage import get_storage
from ..transcription import ModelSize, WhisperRunner
from ..transcription.whisper import DEFAULT_TIMEOUT
from ..types import ErrorResult, SubtitleResult
from ..utils import output_filename
from .orchestrator import resolve_settings, tool_boundary


@tool_boundary("transcribing audio")
async def transcribe_audio(
    input_file: str,
    model_size: ModelSize = "base",
    language: str | None = None,
    output_name: str | None = None,
    input_dir: str | None = None,
    output_dir: str | None = None,
    timeout_seconds: float = DEFAULT_TIMEOUT,
    *,
    settings: Settings | None = None,
) -> SubtitleResult | ErrorResult:
    """Transcribe an audio or video file into an SRT subtitle file.

    Reads ``input_file`` from ``public/`` (or *input_dir*) and writes
    ``subtitles/<output_name>.srt`` (or into *output_dir*). The output name
    defaults to the input file's stem.

    Args:
        input_file: Audio/video filename relative to the input directory
        model_size: whisper.cpp model, downloaded on first use
        language: ISO 639-1 code; auto-detected if omitted
        output_name: Subtitle filename without extension
        input_dir: Directory override for the input file
        output_dir: Directory override for the subtitle file
        timeout_seconds: Upper bound for the transcription process

    Returns:
        SubtitleResult with path, relative_path, input_file, model_size and
        language, or ErrorResult
    """
    settings = resolve_settings(settings)
    overrides: dict[str, pathlib.Path] = {}
    if input_dir:
        overrides["media"] = pathlib.Path(input_dir)
    if output_dir:
        overrides["subtitles"] = pathlib.Path(output_dir)
    storage = get_storage(settings, overrides)

    filename = output_filename(output_name or pathlib.PurePosixPath(input_file).stem, "srt")
    runner = WhisperRunner(settings)

    async with storage.local_path("media", input_file) as source:
        async with storage.local_tempfile("subtitles", filename) as destination:
            logger.info("Transcribing %s with whisper model %s", input_file, model_size)
            subtitle = await runner.transcribe(
                source,
                destination.with_suffix(""),
                size=model_size,
                language=language,
                timeout=timeout_seconds,
            )

    result: dict = {
        "success": True,
        "path": str(subtitle),
        "relative_path": str(subtitle) if output_dir else settings.relative_name("subtitles", filename),
        "input_file": input_file,
        "model_size": model_size,
        "language": language,
    }

    logger.info("Subtitles written to %s", subtitle)
    enrichment = await notify_catalog(
        settings, filename, f"Subtitles transcribed from {input_file}", local_file=subtitle
    )
    return enrichment.apply_to(result)  # type: ignore[return-value]
