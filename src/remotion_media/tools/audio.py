# SPDX-License-Identifier: MIT
"""Audio generation tools.

This module contains all audio-related generation:
- Sound effects (ElevenLabs SFX V2 via the kie.ai jobs API)
- Music (Suno via the kie.ai generate API)
- Speech (ElevenLabs multilingual TTS via the kie.ai jobs API)
"""

from collections.abc import Mapping
from typing import Any, Literal

from ..config import Settings, logger
from ..types import ErrorResult, GenerationResult
from ..utils import output_filename
from .orchestrator import GenerationRequest, resolve_settings, run_generation, tool_boundary

SunoModel = Literal["V3_5", "V4", "V4_5", "V4_5PLUS", "V5"]

SFX_MODEL = "elevenlabs/sound-effect-v2"
SPEECH_MODEL = "elevenlabs/text-to-speech-multilingual-v2"

MAX_SFX_PROMPT = 450
MAX_MUSIC_PROMPT = 500
MAX_SPEECH_TEXT = 5000
MIN_SFX_SECONDS = 0.5
MAX_SFX_SECONDS = 22.0

# The generate endpoint requires a callback URL even though results are polled
MUSIC_CALLBACK_URL = "https://example.com/callback"


@tool_boundary("generating sound effect")
async def generate_sound_effect(
    prompt: str,
    output_name: str | None = None,
    duration_seconds: float | None = None,
    loop: bool | None = None,
    *,
    settings: Settings | None = None,
) -> GenerationResult | ErrorResult:
    """Generate a sound effect and save it as ``public/<output_name>.mp3``.

    Args:
        prompt: Description of the sound (max 450 chars)
        output_name: Filename without extension
        duration_seconds: 0.5-22 seconds; the API picks a length if omitted
        loop: Generate a seamless loop
    """
    settings = resolve_settings(settings)
    if len(prompt) > MAX_SFX_PROMPT:
        raise ValueError(f"prompt must be at most {MAX_SFX_PROMPT} characters")
    if duration_seconds is not None and not MIN_SFX_SECONDS <= duration_seconds <= MAX_SFX_SECONDS:
        raise ValueError(f"duration_seconds must be between {MIN_SFX_SECONDS} and {MAX_SFX_SECONDS}")

    sfx_input: dict[str, Any] = {
        "text": prompt,
        "output_format": "mp3_44100_128",
        "prompt_influence": 0.3,
    }
    if duration_seconds is not None:
        sfx_input["duration_seconds"] = duration_seconds
    if loop is True:
        sfx_input["loop"] = True

    logger.info('Starting sound effect generation: "%s..."', prompt[:50])
    request = GenerationRequest(
        tool="generate_sound_effect",
        noun="sound effect",
        submit_path="/api/v1/jobs/createTask",
        body={"model": SFX_MODEL, "input": sfx_input},
        filename=output_filename(output_name, "mp3", fallback_prefix="sfx"),
        url_key="audio_url",
        description=prompt,
    )
    return await run_generation(settings, request)


def _track_details(track: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "title": track.get("title"),
        "duration": track.get("duration"),
        "cover_image_url": track.get("imageUrl"),
    }


@tool_boundary("generating music")
async def generate_music(
    prompt: str,
    output_name: str | None = None,
    instrumental: bool | None = None,
    model: SunoModel | None = None,
    *,
    settings: Settings | None = None,
) -> GenerationResult | ErrorResult:
    """Generate a music track and save it as ``public/<output_name>.mp3``.

    Args:
        prompt: Description of the music (max 500 chars)
        output_name: Filename without extension
        instrumental: No vocals when true (default false)
        model: Suno model version, default "V5"

    Returns:
        GenerationResult with audio_url, title, duration and cover_image_url
        as reported by Suno, or ErrorResult
    """
    settings = resolve_settings(settings)
    if len(prompt) > MAX_MUSIC_PROMPT:
        raise ValueError(f"prompt must be at most {MAX_MUSIC_PROMPT} characters")

    logger.info('Starting music generation: "%s..."', prompt[:50])
    request = GenerationRequest(
        tool="generate_music",
        noun="music",
        submit_path="/api/v1/generate",
        body={
            "prompt": prompt,
            "customMode": False,
            "instrumental": instrumental is True,
            "model": model or "V5",
            "callBackUrl": MUSIC_CALLBACK_URL,
        },
        filename=output_filename(output_name, "mp3", fallback_prefix="music"),
        url_key="audio_url",
        description=prompt,
        extras=_track_details,
    )
    return await run_generation(settings, request)


@tool_boundary("generating speech")
async def generate_speech(
    text: str,
    output_name: str | None = None,
    voice: str | None = None,
    stability: float | None = None,
    similarity_boost: float | None = None,
    speed: float | None = None,
    language_code: str | None = None,
    *,
    settings: Settings | None = None,
) -> GenerationResult | ErrorResult:
    """Generate narration and save it as ``public/<output_name>.mp3``.

    Args:
        text: Text to speak (max 5000 chars)
        output_name: Filename without extension
        voice: ElevenLabs voice name, default "Rachel"
        stability: 0-1, default 0.5
        similarity_boost: 0-1, default 0.75
        speed: 0.7-1.2, default 1.0
        language_code: Optional ISO 639-1 language hint
    """
    settings = resolve_settings(settings)
    if not text.strip():
        raise ValueError("text must not be empty")
    if len(text) > MAX_SPEECH_TEXT:
        raise ValueError(f"text must be at most {MAX_SPEECH_TEXT} characters")

    speech_input: dict[str, Any] = {
        "text": text,
        "voice": voice or "Rachel",
        "stability": 0.5 if stability is None else stability,
        "similarity_boost": 0.75 if similarity_boost is None else similarity_boost,
        "speed": 1.0 if speed is None else speed,
    }
    if language_code:
        speech_input["language_code"] = language_code

    logger.info('Starting speech generation: "%s..."', text[:50])
    request = GenerationRequest(
        tool="generate_speech",
        noun="speech",
        submit_path="/api/v1/jobs/createTask",
        body={"model": SPEECH_MODEL, "input": speech_input},
        filename=output_filename(output_name, "mp3", fallback_prefix="speech"),
        url_key="audio_url",
        description=text,
    )
    return await run_generation(settings, request)
