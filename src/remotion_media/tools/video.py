# SPDX-License-Identifier: MIT
"""Video generation via the kie.ai Veo 3.1 API.

This module contains:
- Text-to-video generation
- Image-to-video generation (animate one image, or transition between two)
"""

from typing import Literal

from ..config import Settings, logger
from ..types import ErrorResult, GenerationResult
from ..utils import output_filename
from .orchestrator import GenerationRequest, resolve_settings, run_generation, tool_boundary

VeoModel = Literal["veo3", "veo3_fast"]
VideoAspectRatio = Literal["16:9", "9:16", "Auto"]

SUBMIT_PATH = "/api/v1/veo/generate"


def _video_request(
    tool: str,
    prompt: str,
    output_name: str | None,
    body: dict,
) -> GenerationRequest:
    return GenerationRequest(
        tool=tool,
        noun="video",
        submit_path=SUBMIT_PATH,
        body=body,
        filename=output_filename(output_name, "mp4"),
        url_key="video_url",
        description=prompt,
    )


@tool_boundary("generating video")
async def generate_video_from_text(
    prompt: str,
    output_name: str | None = None,
    model: VeoModel | None = None,
    aspect_ratio: VideoAspectRatio | None = None,
    *,
    settings: Settings | None = None,
) -> GenerationResult | ErrorResult:
    """Generate a video from a text prompt and save it as ``public/<output_name>.mp4``.

    Args:
        prompt: Text description of the video
        output_name: Filename without extension
        model: "veo3" (quality) or "veo3_fast" (default)
        aspect_ratio: "16:9" (default), "9:16" or "Auto"
    """
    settings = resolve_settings(settings)
    logger.info('Starting text-to-video generation: "%s..."', prompt[:50])
    body = {
        "prompt": prompt,
        "model": model or "veo3_fast",
        "generationType": "TEXT_2_VIDEO",
        "aspect_ratio": aspect_ratio or "16:9",
        "enableTranslation": True,
    }
    return await run_generation(settings, _video_request("generate_video_from_text", prompt, output_name, body))


@tool_boundary("generating video")
async def generate_video_from_image(
    prompt: str,
    image_urls: list[str],
    output_name: str | None = None,
    model: VeoModel | None = None,
    aspect_ratio: VideoAspectRatio | None = None,
    *,
    settings: Settings | None = None,
) -> GenerationResult | ErrorResult:
    """Animate one image, or transition from the first to the last of two images.

    Args:
        prompt: How the video should animate or transition
        image_urls: 1 or 2 publicly reachable image URLs
        output_name: Filename without extension
        model: "veo3" or "veo3_fast" (default)
        aspect_ratio: "16:9" (default), "9:16" or "Auto"

    Raises:
        ValueError: If not given 1 or 2 image URLs (reported as an error payload)
    """
    settings = resolve_settings(settings)
    if not 1 <= len(image_urls) <= 2:
        raise ValueError(f"image_urls must contain 1 or 2 URLs, got {len(image_urls)}")

    generation_type = "IMAGE_2_VIDEO" if len(image_urls) == 1 else "FIRST_AND_LAST_FRAMES_2_VIDEO"
    logger.info("Starting image-to-video generation with %d image(s)...", len(image_urls))
    body = {
        "prompt": prompt,
        "imageUrls": image_urls,
        "model": model or "veo3_fast",
        "generationType": generation_type,
        "aspect_ratio": aspect_ratio or "16:9",
        "enableTranslation": True,
    }
    return await run_generation(settings, _video_request("generate_video_from_image", prompt, output_name, body))
