# SPDX-License-Identifier: MIT
"""Image generation via the kie.ai jobs API (Nano Banana Pro)."""

from typing import Literal

from ..config import Settings, logger
from ..types import ErrorResult, GenerationResult
from ..utils import output_filename
from .orchestrator import GenerationRequest, resolve_settings, run_generation, tool_boundary

AspectRatio = Literal["1:1", "2:3", "3:2", "3:4", "4:3", "4:5", "5:4", "9:16", "16:9", "21:9", "auto"]
Resolution = Literal["1K", "2K", "4K"]

IMAGE_MODEL = "nano-banana-pro"
MAX_REFERENCE_IMAGES = 8


@tool_boundary("generating image")
async def generate_image(
    prompt: str,
    output_name: str | None = None,
    aspect_ratio: AspectRatio | None = None,
    resolution: Resolution | None = None,
    image_urls: list[str] | None = None,
    *,
    settings: Settings | None = None,
) -> GenerationResult | ErrorResult:
    """Generate an image and save it as ``public/<output_name>.png``.

    Args:
        prompt: Text description of the image
        output_name: Filename without extension (timestamp fallback if omitted)
        aspect_ratio: Aspect ratio, default "1:1"
        resolution: Resolution, default "1K"
        image_urls: Optional reference image URLs (up to 8)

    Returns:
        GenerationResult with path, relative_path, task_id and image_url,
        or ErrorResult
    """
    settings = resolve_settings(settings)
    image_urls = image_urls or []
    if len(image_urls) > MAX_REFERENCE_IMAGES:
        raise ValueError(f"At most {MAX_REFERENCE_IMAGES} reference images are supported, got {len(image_urls)}")

    logger.info('Starting image generation: "%s..."', prompt[:50])
    request = GenerationRequest(
        tool="generate_image",
        noun="image",
        submit_path="/api/v1/jobs/createTask",
        body={
            "model": IMAGE_MODEL,
            "input": {
                "prompt": prompt,
                "image_input": image_urls,
                "aspect_ratio": aspect_ratio or "1:1",
                "resolution": resolution or "1K",
                "output_format": "png",
            },
        },
        filename=output_filename(output_name, "png"),
        url_key="image_url",
        description=prompt,
    )
    return await run_generation(settings, request)
