# SPDX-License-Identifier: MIT
"""Local speech-to-text via the whisper.cpp command-line binary.

The binary writes ``<output_base>.srt`` when called with ``-osrt -of
<output_base>``. GGML model files are looked up in the models directory and
fetched from Hugging Face on first use.
"""

from __future__ import annotations

import logging
import pathlib
import shutil
import uuid
from typing import Literal

import aiofiles
import anyio
import httpx

from ..config import Settings
from ..exceptions import TranscriptionError

logger = logging.getLogger("remotion_media")

ModelSize = Literal[
    "tiny",
    "tiny.en",
    "base",
    "base.en",
    "small",
    "small.en",
    "medium",
    "medium.en",
    "large-v3",
    "large-v3-turbo",
]

MODEL_URL = "https://huggingface.co/ggerganov/whisper.cpp/resolve/main/ggml-{size}.bin"
DEFAULT_TIMEOUT = 600.0
MODEL_DOWNLOAD_TIMEOUT = 1800.0


class WhisperRunner:
    """Locate models and run the transcription binary for one invocation."""

    def __init__(self, settings: Settings) -> None:
        self.binary = settings.whisper_binary
        self.models_dir = settings.whisper_models_dir
        self._transport = settings.transport

    def model_path(self, size: str) -> pathlib.Path:
        return self.models_dir / f"ggml-{size}.bin"

    def resolve_binary(self) -> str:
        """Absolute path of the binary.

        Raises:
            TranscriptionError: If the binary is not on PATH
        """
        found = shutil.which(self.binary)
        if not found:
            raise TranscriptionError(
                f"Transcription binary '{self.binary}' not found. Install whisper.cpp or set WHISPER_BINARY."
            )
        return found

    async def ensure_model(self, size: str) -> pathlib.Path:
        """Return the model file, downloading it first if missing.

        Concurrent downloads of the same model each write their own partial
        file; the last rename wins with identical content.

        Raises:
            httpx.HTTPError: If the download fails
            OSError: If the models directory cannot be written
        """
        path = self.model_path(size)
        if path.is_file():
            return path

        self.models_dir.mkdir(parents=True, exist_ok=True)
        url = MODEL_URL.format(size=size)
        partial = path.with_name(f"{path.name}.{uuid.uuid4().hex}.part")
        logger.info("Downloading whisper model %s from %s", size, url)

        try:
            async with httpx.AsyncClient(
                timeout=MODEL_DOWNLOAD_TIMEOUT, follow_redirects=True, transport=self._transport
            ) as client:
                async with client.stream("GET", url) as response:
                    response.raise_for_status()
                    async with aiofiles.open(partial, "wb") as f:
                        async for chunk in response.aiter_bytes():
                            await f.write(chunk)
            partial.replace(path)
        finally:
            partial.unlink(missing_ok=True)

        logger.info("Saved whisper model to %s", path)
        return path

    async def transcribe(
        self,
        input_path: pathlib.Path,
        output_base: pathlib.Path,
        size: str = "base",
        language: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> pathlib.Path:
        """Transcribe *input_path* into ``<output_base>.srt``.

        Returns:
            Path of the written subtitle file

        Raises:
            TranscriptionError: If the binary is missing, exits non-zero, times
                out, or does not produce the subtitle file
        """
        binary = self.resolve_binary()
        model = await self.ensure_model(size)

        command = [binary, "-m", str(model), "-f", str(input_path), "-osrt", "-of", str(output_base)]
        if language:
            command += ["-l", language]

        logger.info("Running %s", " ".join(command))
        try:
            with anyio.fail_after(timeout):
                result = await anyio.run_process(command, check=False)
        except TimeoutError:
            raise TranscriptionError(f"Transcription timed out after {timeout:g}s") from None

        if result.returncode != 0:
            stderr = result.stderr.decode(errors="replace").strip()
            raise TranscriptionError(f"Transcription failed (exit {result.returncode}): {stderr[-500:]}")

        subtitle = output_base.with_name(output_base.name + ".srt")
        if not subtitle.is_file():
            raise TranscriptionError(f"Transcription produced no subtitle file at {subtitle}")
        return subtitle
