# SPDX-License-Identifier: MIT
"""Unit tests for security utilities."""

import pathlib

import pytest

from remotion_media.security import check_not_symlink, validate_safe_path


@pytest.fixture
def base(tmp_path: pathlib.Path) -> pathlib.Path:
    public = tmp_path / "public"
    public.mkdir()
    return public


@pytest.mark.unit
class TestValidateSafePath:
    """Path validation and traversal protection."""

    def test_valid_filename(self, base):
        target = base / "intro.png"
        target.write_bytes(b"x")

        assert validate_safe_path(base, "intro.png") == target.resolve()

    @pytest.mark.parametrize(
        "attempt",
        ["../secret.txt", "../../etc/passwd", "scenes/../../outside.mp4", "/etc/passwd"],
    )
    def test_traversal_rejected(self, base, attempt):
        with pytest.raises(ValueError, match="path traversal detected"):
            validate_safe_path(base, attempt, allow_create=True)

    def test_missing_file_rejected_without_allow_create(self, base):
        with pytest.raises(ValueError, match="File not found: missing.png"):
            validate_safe_path(base, "missing.png")

    def test_missing_file_allowed_with_allow_create(self, base):
        result = validate_safe_path(base, "scenes/new.png", allow_create=True)
        assert result == (base / "scenes" / "new.png").resolve()

    @pytest.mark.parametrize("name", ["", "   "])
    def test_empty_name_rejected(self, base, name):
        with pytest.raises(ValueError, match="must not be empty"):
            validate_safe_path(base, name, allow_create=True)

    def test_base_directory_itself_rejected(self, base):
        with pytest.raises(ValueError, match="Invalid filename"):
            validate_safe_path(base, ".", allow_create=True)


@pytest.mark.unit
class TestCheckNotSymlink:
    def test_regular_file_passes(self, base):
        target = base / "a.mp3"
        target.write_bytes(b"x")
        check_not_symlink(target, "media file")

    def test_symlink_rejected(self, base, tmp_path):
        outside = tmp_path / "outside.mp3"
        outside.write_bytes(b"x")
        link = base / "link.mp3"
        link.symlink_to(outside)

        with pytest.raises(ValueError, match="media file cannot be a symbolic link: link.mp3"):
            check_not_symlink(link, "media file")
