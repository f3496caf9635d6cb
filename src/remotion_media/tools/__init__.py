# SPDX-License-Identifier: MIT
"""MCP tool implementations organized by category.

- image: Nano Banana Pro image generation
- video: Veo 3.1 text/image-to-video generation
- audio: sound effects, music and speech
- transcription: local whisper.cpp subtitles
- media: listing of generated files
- catalog: Airtable asset catalog

Each generation tool runs through :func:`orchestrator.run_generation`; the
FastMCP registrations live in ``server.py``.
"""
