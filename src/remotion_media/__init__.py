# SPDX-License-Identifier: MIT
"""MCP server for generating media assets for Remotion video projects."""

__version__ = "1.0.0"
