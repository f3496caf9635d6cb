# SPDX-License-Identifier: MIT
"""Configuration management for remotion-media MCP server.

This module handles:
- Logging setup
- Environment variable resolution into an explicit ``Settings`` value
- Path configuration for the output, subtitle and backup directories
"""

import logging
import os
import pathlib
import sys
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Literal

import httpx

from .exceptions import ConfigurationError

# ---------- Logging configuration ----------
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=LOG_LEVEL,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    stream=sys.stderr,  # Log to stderr to avoid interfering with stdio MCP transport
)
logger = logging.getLogger("remotion_media")


def apply_log_level() -> None:
    """Re-read LOG_LEVEL, e.g. after ``main()`` loaded a ``.env`` file."""
    logging.getLogger().setLevel(os.getenv("LOG_LEVEL", "INFO").upper())


PathType = Literal["media", "subtitles", "backups"]
"""Identifies which project directory a file operation targets."""

# Mapping from path_type to directory name under the project root
_DIRECTORIES: dict[str, str] = {
    "media": "public",
    "subtitles": "subtitles",
    "backups": "backups",
}

DEFAULT_KIE_API_BASE = "https://api.kie.ai"
DEFAULT_POLL_INTERVAL = 5.0


@dataclass(frozen=True)
class Settings:
    """Resolved configuration threaded into every component.

    Built once from the environment by :func:`get_settings`; tests construct
    it directly with fixed values and an ``httpx.MockTransport``.
    """

    kie_api_key: str | None = None
    kie_api_base: str = DEFAULT_KIE_API_BASE
    airtable_api_key: str | None = None
    airtable_base_id: str = ""
    airtable_table_name: str = "Assets"
    project_root: pathlib.Path = field(default_factory=pathlib.Path.cwd)
    whisper_binary: str = "whisper-cli"
    whisper_models_dir: pathlib.Path = field(default_factory=lambda: pathlib.Path.home() / ".cache" / "whisper.cpp")
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL
    request_timeout: float = 120.0
    transport: httpx.AsyncBaseTransport | None = None

    def require_kie_key(self) -> str:
        """Return the kie.ai API key.

        Raises:
            ConfigurationError: If KIE_API_KEY is not set
        """
        if not self.kie_api_key:
            raise ConfigurationError("KIE_API_KEY environment variable is required")
        return self.kie_api_key

    @property
    def catalog_configured(self) -> bool:
        return bool(self.airtable_api_key and self.airtable_base_id)

    def path_for(self, path_type: PathType) -> pathlib.Path:
        """Absolute directory for *path_type* under the project root (not created)."""
        return (self.project_root / _DIRECTORIES[path_type]).resolve()

    def relative_name(self, path_type: PathType, filename: str) -> str:
        """Project-relative display name, e.g. ``public/intro.png``."""
        return f"{_DIRECTORIES[path_type]}/{filename}"


def _env(name: str) -> str | None:
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _resolve_project_root() -> pathlib.Path:
    root_str = _env("REMOTION_PROJECT_DIR")
    if root_str is None:
        return pathlib.Path.cwd()

    original = pathlib.Path(root_str)
    # Security: Reject symlinks in configured paths (env vars only, not user filenames)
    if original.exists() and original.is_symlink():
        raise ConfigurationError(f"REMOTION_PROJECT_DIR cannot be a symbolic link: {root_str}")
    try:
        root = original.resolve()
    except (ValueError, OSError) as e:
        raise ConfigurationError(f"Invalid REMOTION_PROJECT_DIR '{root_str}': {e}") from e
    if not root.is_dir():
        raise ConfigurationError(f"REMOTION_PROJECT_DIR is not a directory: {root}")
    return root


def _resolve_poll_interval() -> float:
    raw = _env("KIE_POLL_INTERVAL")
    if raw is None:
        return DEFAULT_POLL_INTERVAL
    try:
        interval = float(raw)
    except ValueError as e:
        raise ConfigurationError(f"KIE_POLL_INTERVAL must be a number, got {raw!r}") from e
    if interval < 0:
        raise ConfigurationError(f"KIE_POLL_INTERVAL must be non-negative, got {interval}")
    return interval


def load_settings() -> Settings:
    """Read the environment into a fresh :class:`Settings`.

    Credentials are optional at this point: a missing KIE_API_KEY only fails
    the tool call that needs it, and missing Airtable credentials put the
    catalog tools into their "not configured" mode.
    """
    models_dir = _env("WHISPER_MODELS_DIR")
    return Settings(
        kie_api_key=_env("KIE_API_KEY"),
        kie_api_base=(_env("KIE_API_BASE") or DEFAULT_KIE_API_BASE).rstrip("/"),
        airtable_api_key=_env("AIRTABLE_API_KEY"),
        airtable_base_id=_env("AIRTABLE_BASE_ID") or "",
        airtable_table_name=_env("AIRTABLE_TABLE_NAME") or "Assets",
        project_root=_resolve_project_root(),
        whisper_binary=_env("WHISPER_BINARY") or "whisper-cli",
        whisper_models_dir=(
            pathlib.Path(models_dir).expanduser()
            if models_dir
            else pathlib.Path.home() / ".cache" / "whisper.cpp"
        ),
        poll_interval_seconds=_resolve_poll_interval(),
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide :class:`Settings` (resolved once, then cached).

    Resolution is lazy so that ``.env`` files loaded in ``main()`` are seen.

    Raises:
        ConfigurationError: If REMOTION_PROJECT_DIR or KIE_POLL_INTERVAL is malformed
    """
    settings = load_settings()
    logger.debug(
        "Resolved settings (project_root=%s, catalog_configured=%s)", settings.project_root, settings.catalog_configured
    )
    return settings
