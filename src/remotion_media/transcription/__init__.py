# SPDX-License-Identifier: MIT
"""Local subtitle generation."""

from .whisper import ModelSize, WhisperRunner

__all__ = ["ModelSize", "WhisperRunner"]
