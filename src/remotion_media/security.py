# SPDX-License-Identifier: MIT
"""Path safety helpers for user-supplied filenames."""

import pathlib


def validate_safe_path(base_path: pathlib.Path, filename: str, allow_create: bool = False) -> pathlib.Path:
    """Resolve *filename* inside *base_path*, rejecting anything that escapes it.

    Subdirectories are allowed (``scenes/intro.png``); absolute paths and
    ``..`` segments that leave the base directory are not.

    Args:
        base_path: Directory the file must live in
        filename: User-supplied relative filename
        allow_create: If False, the file must already exist

    Returns:
        Absolute resolved path

    Raises:
        ValueError: If path traversal detected or the file does not exist
    """
    if not filename or not filename.strip():
        raise ValueError("Filename must not be empty")

    base = base_path.resolve()
    candidate = (base / filename).resolve()

    try:
        candidate.relative_to(base)
    except ValueError:
        raise ValueError(f"Invalid filename: path traversal detected ({filename})") from None

    if candidate == base:
        raise ValueError(f"Invalid filename: {filename}")

    if not allow_create and not candidate.exists():
        raise ValueError(f"File not found: {filename}")

    return candidate


def check_not_symlink(path: pathlib.Path, label: str) -> None:
    """Raise if *path* is a symbolic link.

    Raises:
        ValueError: If the path is a symlink
    """
    if path.is_symlink():
        raise ValueError(f"{label} cannot be a symbolic link: {path.name}")
