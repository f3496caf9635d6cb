# SPDX-License-Identifier: MIT
"""Shared generation pipeline for the kie.ai tools.

Every generation tool runs the same sequence, each step starting only after
the previous one finished::

    submit -> poll (adapter chosen by tool name) -> download -> catalog

Failures before a successful poll outcome become an error payload; catalog
failures only add a ``catalog_warning``.
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, ParamSpec

from ..artifacts import download_artifact
from ..catalog import notify_catalog
from ..config import Settings, get_settings, logger
from ..exceptions import UpstreamRejectedError
from ..jobs import TOOL_ADAPTERS, JobPoller, PollSuccess, PollTimeout
from ..kie import KieClient
from ..storage import StorageBackend, get_storage
from ..types import ErrorResult, GenerationResult

P = ParamSpec("P")


@dataclass(frozen=True)
class GenerationRequest:
    """Everything a tool contributes to the pipeline.

    Attributes:
        tool: Tool name; selects the status adapter
        noun: Human label used in messages ("image", "video", "music", ...)
        submit_path: kie.ai endpoint that creates the task
        body: JSON request body
        filename: Artifact filename under ``public/``
        url_key: Payload key for the remote URL (``image_url``, ...)
        description: Text stored with the catalog record
        extras: Builds extra payload fields from the successful outcome
    """

    tool: str
    noun: str
    submit_path: str
    body: dict[str, Any]
    filename: str
    url_key: str
    description: str
    extras: Callable[[Mapping[str, Any]], dict[str, Any]] | None = field(default=None)


async def run_generation(
    settings: Settings,
    request: GenerationRequest,
    *,
    storage: StorageBackend | None = None,
) -> GenerationResult | ErrorResult:
    """Submit, poll, download and register one generation job.

    Raises:
        ConfigurationError: If KIE_API_KEY is not set
        ValueError: If the output filename escapes the output directory
        httpx.HTTPError: On transport failure (submission, polling or download)
        OSError: If the artifact cannot be written
    """
    adapter = TOOL_ADAPTERS[request.tool]
    storage = storage or get_storage(settings)
    # Output name is validated before anything is submitted
    storage.resolve_display_path("media", request.filename)

    async with KieClient.from_settings(settings) as client:
        try:
            task_id = await client.submit(request.submit_path, request.body)
        except UpstreamRejectedError as e:
            return {"success": False, "error": f"Error creating {request.noun} task: {e.msg}"}
        logger.info("%s task created: %s", request.noun.capitalize(), task_id)

        poller = JobPoller(client, adapter, settings.poll_interval_seconds)
        outcome = await poller.poll(task_id)

    if not isinstance(outcome, PollSuccess):
        result: ErrorResult = {"success": False, "error": f"Error: {outcome.message}", "task_id": task_id}
        if isinstance(outcome, PollTimeout):
            logger.warning("%s task %s gave up after %d attempts", request.noun, task_id, outcome.attempts)
        return result

    logger.info("Downloading %s to %s...", request.noun, request.filename)
    artifact = await download_artifact(
        outcome.result_url,
        storage,
        "media",
        request.filename,
        transport=settings.transport,
    )

    payload: dict[str, Any] = {
        "success": True,
        "path": artifact.path,
        "relative_path": settings.relative_name("media", request.filename),
        "task_id": task_id,
        request.url_key: outcome.result_url,
    }
    if request.extras is not None:
        payload.update(request.extras(outcome.payload))

    enrichment = await notify_catalog(settings, request.filename, request.description, file_url=outcome.result_url)
    return enrichment.apply_to(payload)  # type: ignore[return-value]


def tool_boundary(action: str) -> Callable[[Callable[P, Awaitable[Any]]], Callable[P, Awaitable[Any]]]:
    """Convert any exception escaping a tool into ``{"success": False, "error": ...}``.

    Args:
        action: Phrase completing "Error <action>: ...", e.g. "generating image"
    """

    def decorator(func: Callable[P, Awaitable[Any]]) -> Callable[P, Awaitable[Any]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                logger.error("%s failed: %s", func.__name__, e)
                return {"success": False, "error": f"Error {action}: {e}"}

        return wrapper

    return decorator


def resolve_settings(settings: Settings | None) -> Settings:
    return settings if settings is not None else get_settings()
