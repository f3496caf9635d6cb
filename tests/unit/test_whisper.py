# SPDX-License-Identifier: MIT
"""Unit tests for WhisperRunner with a mocked subprocess."""

import subprocess

import anyio
import httpx
import pytest

from remotion_media.exceptions import TranscriptionError
from remotion_media.transcription import WhisperRunner

MODEL_URL = "https://huggingface.co/ggerganov/whisper.cpp/resolve/main/ggml-base.bin"


@pytest.fixture
def runner(settings):
    return WhisperRunner(settings)


@pytest.fixture
def installed(mocker):
    return mocker.patch("remotion_media.transcription.whisper.shutil.which", return_value="/usr/local/bin/whisper-cli")


@pytest.fixture
def model_file(settings):
    settings.whisper_models_dir.mkdir(parents=True)
    path = settings.whisper_models_dir / "ggml-base.bin"
    path.write_bytes(b"GGML")
    return path


def _completed(command, returncode=0, stderr=b""):
    return subprocess.CompletedProcess(command, returncode, stdout=b"", stderr=stderr)


# ------------------------------------------------------------------
# Binary / model resolution
# ------------------------------------------------------------------


@pytest.mark.unit
def test_missing_binary(runner, mocker):
    mocker.patch("remotion_media.transcription.whisper.shutil.which", return_value=None)
    with pytest.raises(TranscriptionError, match="'whisper-cli' not found"):
        runner.resolve_binary()


@pytest.mark.unit
def test_model_path(runner, settings):
    assert runner.model_path("large-v3-turbo") == settings.whisper_models_dir / "ggml-large-v3-turbo.bin"


@pytest.mark.unit
async def test_existing_model_not_downloaded(runner, model_file, upstream):
    assert await runner.ensure_model("base") == model_file
    assert upstream.requests == []


@pytest.mark.unit
async def test_model_downloaded_when_missing(runner, settings, upstream):
    upstream.add("GET", MODEL_URL, b"MODEL-BYTES")

    path = await runner.ensure_model("base")

    assert path.read_bytes() == b"MODEL-BYTES"
    assert list(settings.whisper_models_dir.iterdir()) == [path]


@pytest.mark.unit
async def test_concurrent_model_downloads_do_not_collide(runner, settings, upstream):
    async def slow_body():
        for _ in range(5):
            await anyio.sleep(0.01)
            yield b"0123456789"

    upstream.add("GET", MODEL_URL, lambda request: httpx.Response(200, content=slow_body()))
    paths = []

    async def fetch():
        paths.append(await runner.ensure_model("base"))

    async with anyio.create_task_group() as tg:
        tg.start_soon(fetch)
        tg.start_soon(fetch)

    assert paths == [settings.whisper_models_dir / "ggml-base.bin"] * 2
    assert paths[0].read_bytes() == b"0123456789" * 5
    assert list(settings.whisper_models_dir.iterdir()) == [paths[0]]
    assert len(upstream.calls("GET", MODEL_URL)) == 2


@pytest.mark.unit
async def test_failed_model_download_leaves_nothing(runner, settings, upstream):
    upstream.add("GET", MODEL_URL, (404, b"missing"))

    with pytest.raises(httpx.HTTPStatusError):
        await runner.ensure_model("base")

    assert list(settings.whisper_models_dir.iterdir()) == []


# ------------------------------------------------------------------
# transcribe
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_transcribe_builds_command(runner, installed, model_file, tmp_path, mocker):
    output_base = tmp_path / "out" / "intro"
    output_base.parent.mkdir()

    async def fake_run(command, check):
        output_base.with_name("intro.srt").write_text("1\n00:00:00,000 --> 00:00:01,000\nHello\n")
        return _completed(command)

    run = mocker.patch("remotion_media.transcription.whisper.anyio.run_process", side_effect=fake_run)

    subtitle = await runner.transcribe(tmp_path / "intro.mp3", output_base, size="base", language="en")

    assert subtitle == tmp_path / "out" / "intro.srt"
    command = run.call_args.args[0]
    assert command == [
        "/usr/local/bin/whisper-cli",
        "-m",
        str(model_file),
        "-f",
        str(tmp_path / "intro.mp3"),
        "-osrt",
        "-of",
        str(output_base),
        "-l",
        "en",
    ]


@pytest.mark.unit
async def test_transcribe_without_language(runner, installed, model_file, tmp_path, mocker):
    async def fake_run(command, check):
        (tmp_path / "a.srt").write_text("")
        return _completed(command)

    run = mocker.patch("remotion_media.transcription.whisper.anyio.run_process", side_effect=fake_run)

    await runner.transcribe(tmp_path / "a.wav", tmp_path / "a")

    assert "-l" not in run.call_args.args[0]


@pytest.mark.unit
async def test_nonzero_exit(runner, installed, model_file, tmp_path, mocker):
    async def fake_run(command, check):
        return _completed(command, returncode=3, stderr=b"error: failed to read audio\n")

    mocker.patch("remotion_media.transcription.whisper.anyio.run_process", side_effect=fake_run)

    with pytest.raises(TranscriptionError, match=r"exit 3\): error: failed to read audio"):
        await runner.transcribe(tmp_path / "a.wav", tmp_path / "a")


@pytest.mark.unit
async def test_missing_output_file(runner, installed, model_file, tmp_path, mocker):
    async def fake_run(command, check):
        return _completed(command)

    mocker.patch("remotion_media.transcription.whisper.anyio.run_process", side_effect=fake_run)

    with pytest.raises(TranscriptionError, match="no subtitle file"):
        await runner.transcribe(tmp_path / "a.wav", tmp_path / "a")


@pytest.mark.unit
async def test_timeout(runner, installed, model_file, tmp_path, mocker):
    async def slow_run(command, check):
        await anyio.sleep(5)

    mocker.patch("remotion_media.transcription.whisper.anyio.run_process", side_effect=slow_run)

    with pytest.raises(TranscriptionError, match="timed out after 0.05s"):
        await runner.transcribe(tmp_path / "a.wav", tmp_path / "a", timeout=0.05)
