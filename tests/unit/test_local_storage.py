# SPDX-License-Identifier: MIT
"""Unit tests for LocalStorageBackend."""

import pathlib

import pytest

from remotion_media.config import Settings
from remotion_media.storage import FileInfo, StorageBackend, get_storage
from remotion_media.storage.local import LocalStorageBackend


@pytest.fixture
def backend(tmp_path: pathlib.Path) -> LocalStorageBackend:
    return LocalStorageBackend(Settings(project_root=tmp_path))


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


async def _put(backend, path_type, name, data: bytes) -> str:
    return await backend.write_stream(path_type, name, _chunks(data))


# ------------------------------------------------------------------
# Protocol conformance
# ------------------------------------------------------------------


@pytest.mark.unit
def test_local_storage_is_storage_backend(tmp_path):
    assert isinstance(get_storage(Settings(project_root=tmp_path)), StorageBackend)


# ------------------------------------------------------------------
# write_stream / read
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_write_creates_public_directory(backend, tmp_path):
    path = await _put(backend, "media", "intro.png", b"PNG")

    assert pathlib.Path(path) == (tmp_path / "public" / "intro.png").resolve()
    assert (tmp_path / "public" / "intro.png").read_bytes() == b"PNG"


@pytest.mark.unit
async def test_write_stream_creates_nested_directories(backend, tmp_path):
    path = await backend.write_stream("media", "scenes/one/clip.mp4", _chunks(b"ab", b"cd"))

    assert pathlib.Path(path).read_bytes() == b"abcd"
    assert (tmp_path / "public" / "scenes" / "one").is_dir()


@pytest.mark.unit
async def test_read_roundtrip(backend):
    await _put(backend, "subtitles", "intro.srt", b"1\n00:00:00,000 --> 00:00:01,000\nhi\n")
    assert (await backend.read("subtitles", "intro.srt")).startswith(b"1\n")


@pytest.mark.unit
async def test_read_missing_file(backend):
    with pytest.raises(ValueError, match="File not found"):
        await backend.read("media", "nope.png")


@pytest.mark.unit
async def test_write_path_traversal(backend):
    with pytest.raises(ValueError, match="path traversal"):
        await _put(backend, "media", "../escape.png", b"x")


@pytest.mark.unit
async def test_read_symlink_rejected(backend, tmp_path):
    public = tmp_path / "public"
    public.mkdir()
    (tmp_path / "secret.txt").write_text("s")
    (public / "link.png").symlink_to(tmp_path / "secret.txt")

    with pytest.raises(ValueError, match="symbolic link"):
        await backend.read("media", "link.png")


# ------------------------------------------------------------------
# overrides
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_path_override(tmp_path):
    custom = tmp_path / "elsewhere"
    backend = LocalStorageBackend(Settings(project_root=tmp_path), path_overrides={"backups": custom})

    path = await _put(backend, "backups", "a.mp3", b"x")

    assert pathlib.Path(path) == (custom / "a.mp3").resolve()
    assert backend.directory("backups") == custom.resolve()
    assert not (tmp_path / "backups").exists()


# ------------------------------------------------------------------
# listing
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_list_files_missing_directory(backend):
    assert await backend.list_files("media") == []


@pytest.mark.unit
async def test_list_files_filters_extensions(backend):
    await _put(backend, "media", "a.png", b"1")
    await _put(backend, "media", "b.mp4", b"22")
    await _put(backend, "media", "c.txt", b"333")

    files = await backend.list_files("media", extensions={".png", ".mp4"})

    assert sorted(f.name for f in files) == ["a.png", "b.mp4"]
    assert all(isinstance(f, FileInfo) for f in files)
    assert {f.name: f.size_bytes for f in files} == {"a.png": 1, "b.mp4": 2}


@pytest.mark.unit
async def test_list_files_skips_links_leaving_directory(backend, tmp_path):
    await _put(backend, "media", "inside.png", b"1")
    (tmp_path / "outside.png").write_bytes(b"2")
    (tmp_path / "public" / "link.png").symlink_to(tmp_path / "outside.png")

    files = await backend.list_files("media")

    assert [f.name for f in files] == ["inside.png"]


# ------------------------------------------------------------------
# local path helpers
# ------------------------------------------------------------------


@pytest.mark.unit
async def test_local_tempfile_prepares_directory(backend, tmp_path):
    async with backend.local_tempfile("subtitles", "intro.srt") as path:
        assert path.parent.is_dir()
        path.write_text("x")

    assert (tmp_path / "subtitles" / "intro.srt").read_text() == "x"


@pytest.mark.unit
async def test_local_path_requires_existing_file(backend):
    with pytest.raises(ValueError, match="File not found"):
        async with backend.local_path("media", "missing.mp3"):
            pass


@pytest.mark.unit
def test_resolve_display_path_does_not_create(backend, tmp_path):
    display = backend.resolve_display_path("media", "x.png")

    assert display == str((tmp_path / "public" / "x.png").resolve())
    assert not (tmp_path / "public").exists()
