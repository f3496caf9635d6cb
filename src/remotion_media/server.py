# SPDX-License-Identifier: MIT
"""Remotion Media MCP Server - FastMCP server for AI media generation.

This module initializes the FastMCP server and registers all tools.
Business logic is organized into submodules under tools/.
"""

from typing import Annotated

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP
from pydantic import Field

from .config import apply_log_level, logger
from .descriptions import (
    CATALOG_BACKUP_ASSET,
    CATALOG_DOWNLOAD_ASSET,
    CATALOG_GET_ASSET,
    CATALOG_LIST_ASSETS,
    GENERATE_IMAGE,
    GENERATE_MUSIC,
    GENERATE_SOUND_EFFECT,
    GENERATE_SPEECH,
    GENERATE_VIDEO_FROM_IMAGE,
    GENERATE_VIDEO_FROM_TEXT,
    LIST_GENERATED_MEDIA,
    TRANSCRIBE_AUDIO,
)
from .tools import audio, catalog, image, media, transcription, video
from .tools.audio import SunoModel
from .tools.catalog import CatalogFileType
from .tools.image import AspectRatio, Resolution
from .tools.video import VeoModel, VideoAspectRatio
from .transcription import ModelSize

mcp = FastMCP("remotion-media-mcp")


# ==================== IMAGE TOOLS ====================
@mcp.tool(description=GENERATE_IMAGE)
async def generate_image(
    prompt: str,
    output_name: str | None = None,
    aspect_ratio: AspectRatio | None = None,
    resolution: Resolution | None = None,
    image_urls: Annotated[list[str] | None, Field(max_length=8)] = None,
):
    return await image.generate_image(prompt, output_name, aspect_ratio, resolution, image_urls)


# ==================== VIDEO TOOLS ====================
@mcp.tool(description=GENERATE_VIDEO_FROM_TEXT)
async def generate_video_from_text(
    prompt: str,
    output_name: str | None = None,
    model: VeoModel | None = None,
    aspect_ratio: VideoAspectRatio | None = None,
):
    return await video.generate_video_from_text(prompt, output_name, model, aspect_ratio)


@mcp.tool(description=GENERATE_VIDEO_FROM_IMAGE)
async def generate_video_from_image(
    prompt: str,
    image_urls: Annotated[list[str], Field(min_length=1, max_length=2)],
    output_name: str | None = None,
    model: VeoModel | None = None,
    aspect_ratio: VideoAspectRatio | None = None,
):
    return await video.generate_video_from_image(prompt, image_urls, output_name, model, aspect_ratio)


# ==================== AUDIO TOOLS ====================
@mcp.tool(description=GENERATE_SOUND_EFFECT)
async def generate_sound_effect(
    prompt: Annotated[str, Field(max_length=450)],
    output_name: str | None = None,
    duration_seconds: Annotated[float | None, Field(ge=0.5, le=22)] = None,
    loop: bool | None = None,
):
    return await audio.generate_sound_effect(prompt, output_name, duration_seconds, loop)


@mcp.tool(description=GENERATE_MUSIC)
async def generate_music(
    prompt: Annotated[str, Field(max_length=500)],
    output_name: str | None = None,
    instrumental: bool | None = None,
    model: SunoModel | None = None,
):
    return await audio.generate_music(prompt, output_name, instrumental, model)


@mcp.tool(description=GENERATE_SPEECH)
async def generate_speech(
    text: Annotated[str, Field(min_length=1, max_length=5000)],
    output_name: str | None = None,
    voice: str | None = None,
    stability: Annotated[float | None, Field(ge=0, le=1)] = None,
    similarity_boost: Annotated[float | None, Field(ge=0, le=1)] = None,
    speed: Annotated[float | None, Field(ge=0.7, le=1.2)] = None,
    language_code: str | None = None,
):
    return await audio.generate_speech(
        text, output_name, voice, stability, similarity_boost, speed, language_code
    )


# ==================== TRANSCRIPTION TOOLS ====================
@mcp.tool(description=TRANSCRIBE_AUDIO)
async def transcribe_audio(
    input_file: str,
    model_size: ModelSize = "base",
    language: str | None = None,
    output_name: str | None = None,
    input_dir: str | None = None,
    output_dir: str | None = None,
    timeout_seconds: Annotated[float, Field(gt=0)] = 600,
):
    return await transcription.transcribe_audio(
        input_file, model_size, language, output_name, input_dir, output_dir, timeout_seconds
    )


# ==================== MEDIA TOOLS ====================
@mcp.tool(description=LIST_GENERATED_MEDIA)
async def list_generated_media():
    return await media.list_generated_media()


# ==================== CATALOG TOOLS ====================
@mcp.tool(description=CATALOG_BACKUP_ASSET)
async def catalog_backup_asset(filename: str, description: str, source_dir: str | None = None):
    return await catalog.catalog_backup_asset(filename, description, source_dir)


@mcp.tool(description=CATALOG_LIST_ASSETS)
async def catalog_list_assets(
    file_type: CatalogFileType | None = None,
    limit: Annotated[int, Field(ge=1, le=100)] = 20,
    offset: str | None = None,
):
    return await catalog.catalog_list_assets(file_type, limit, offset)


@mcp.tool(description=CATALOG_GET_ASSET)
async def catalog_get_asset(aid: str):
    return await catalog.catalog_get_asset(aid)


@mcp.tool(description=CATALOG_DOWNLOAD_ASSET)
async def catalog_download_asset(aid: str, output_name: str | None = None, output_dir: str | None = None):
    return await catalog.catalog_download_asset(aid, output_name, output_dir)


# ==================== SERVER ENTRYPOINT ====================
def main():
    """Run the MCP server over stdio.

    Settings are resolved lazily on the first tool call, after ``.env`` is loaded.
    """
    load_dotenv()
    apply_log_level()
    logger.info("Starting remotion-media MCP server over stdio")
    mcp.run()


if __name__ == "__main__":
    main()
