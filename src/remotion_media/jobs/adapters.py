# SPDX-License-Identifier: MIT
"""Per-provider interpretation of kie.ai status responses.

Each adapter turns one raw status envelope (``{"code", "msg", "data"}``) into
a :class:`StatusDecision`. The three kie.ai surfaces disagree on field names,
terminal values and where result URLs live:

- jobs API (``/api/v1/jobs``): ``data.state`` is ``success`` / ``fail``;
  ``data.resultJson`` is a JSON *string* holding ``resultUrls``.
- Veo video API: ``data.successFlag == 1`` plus ``data.response.resultUrls``;
  any ``errorCode`` / ``errorMessage`` is fatal.
- Suno music API: ``data.status`` with one success value and several failure
  values; the track list is ``data.sunoData``.

Unknown intermediate values always mean "keep polling".
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

from .outcome import Continue, Failed, StatusDecision, Succeeded


class StatusAdapter:
    """Shared envelope handling; subclasses implement :meth:`classify_data`."""

    status_path: str
    max_attempts: int
    timeout_message: str
    label: str

    def classify(self, envelope: Mapping[str, Any]) -> StatusDecision:
        """Classify one status response as continue / success / failure."""
        if envelope.get("code") != 200:
            return self.classify_rejection(envelope)
        data = envelope.get("data") or {}
        if not isinstance(data, Mapping):
            return Continue(f"{self.label} status: unreadable payload, waiting...")
        return self.classify_data(data)

    def classify_rejection(self, envelope: Mapping[str, Any]) -> StatusDecision:
        return Failed(f"API error: {envelope.get('msg')}")

    def classify_data(self, data: Mapping[str, Any]) -> StatusDecision:
        raise NotImplementedError


class JobsApiAdapter(StatusAdapter):
    """``/api/v1/jobs/recordInfo`` (image, sound effect, speech models)."""

    status_path = "/api/v1/jobs/recordInfo"
    max_attempts = 120
    timeout_message = "Task timed out"
    label = "Task"

    SUCCESS_STATE = "success"
    FAILURE_STATE = "fail"

    def classify_data(self, data: Mapping[str, Any]) -> StatusDecision:
        state = data.get("state")

        if state == self.SUCCESS_STATE:
            result = _parse_result_json(data.get("resultJson"))
            url = _first_url(result)
            if not url:
                return Failed("No result URL in response")
            return Succeeded(url, result)

        if state == self.FAILURE_STATE:
            return Failed(data.get("failMsg") or "Task failed")

        # waiting, queuing, generating, or anything new
        return Continue(f"{self.label} status: {state}, waiting...")


class VeoAdapter(StatusAdapter):
    """``/api/v1/veo/record-info`` (text-to-video and image-to-video)."""

    status_path = "/api/v1/veo/record-info"
    max_attempts = 180
    timeout_message = "Video generation timed out"
    label = "Video"

    # Veo reports an in-flight task as a 400 envelope whose message mentions
    # "processing". This matches upstream free text and is known to be fragile.
    PROCESSING_CODE = 400
    PROCESSING_MARKER = "processing"
    FAILED_FLAGS = (2, 3)

    def classify_rejection(self, envelope: Mapping[str, Any]) -> StatusDecision:
        msg = envelope.get("msg") or ""
        if envelope.get("code") == self.PROCESSING_CODE and self.PROCESSING_MARKER in msg:
            return Continue(f"{self.label} still processing...")
        return super().classify_rejection(envelope)

    def classify_data(self, data: Mapping[str, Any]) -> StatusDecision:
        response = data.get("response") or {}
        urls = response.get("resultUrls") if isinstance(response, Mapping) else None

        if data.get("successFlag") == 1 and urls:
            return Succeeded(urls[0], response)

        error_code = data.get("errorCode")
        error_message = data.get("errorMessage")
        if error_code or error_message:
            return Failed(error_message or f"Error code: {error_code}")

        if data.get("successFlag") in self.FAILED_FLAGS:
            return Failed("Video generation failed")

        return Continue(f"{self.label} status: processing, waiting...")


class SunoAdapter(StatusAdapter):
    """``/api/v1/generate/record-info`` (music)."""

    status_path = "/api/v1/generate/record-info"
    max_attempts = 180
    timeout_message = "Music generation timed out"
    label = "Music"

    SUCCESS_STATUS = "SUCCESS"
    FAILURE_STATUSES = frozenset(
        {
            "FAILED",
            "ERROR",
            "CREATE_TASK_FAILED",
            "GENERATE_AUDIO_FAILED",
            "CALLBACK_EXCEPTION",
            "SENSITIVE_WORD_ERROR",
        }
    )

    def classify_data(self, data: Mapping[str, Any]) -> StatusDecision:
        status = data.get("status")

        if status == self.SUCCESS_STATUS:
            track = _first_track(data)
            if track is not None:
                return Succeeded(track["audioUrl"], track)

        if status in self.FAILURE_STATUSES:
            return Failed(data.get("errorMessage") or "Music generation failed")

        # PENDING, TEXT_SUCCESS, FIRST_SUCCESS, SUCCESS without audio yet
        return Continue(f"{self.label} status: {status}, waiting...")


def _parse_result_json(raw: Any) -> dict[str, Any]:
    """Second parse pass over ``resultJson``; tolerate an already-decoded dict."""
    if isinstance(raw, Mapping):
        return dict(raw)
    if not raw:
        return {}
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        return {}
    return parsed if isinstance(parsed, dict) else {}


def _first_url(result: Mapping[str, Any]) -> str | None:
    urls = result.get("resultUrls")
    if isinstance(urls, list) and urls:
        return urls[0]
    return result.get("audio_url") or result.get("audioUrl")


def _first_track(data: Mapping[str, Any]) -> Mapping[str, Any] | None:
    response = data.get("response")
    tracks = data.get("sunoData")
    if not tracks and isinstance(response, Mapping):
        tracks = response.get("sunoData")
    if isinstance(tracks, list) and tracks and isinstance(tracks[0], Mapping) and tracks[0].get("audioUrl"):
        return tracks[0]
    return None


JOBS_API = JobsApiAdapter()
VEO = VeoAdapter()
SUNO = SunoAdapter()

TOOL_ADAPTERS: dict[str, StatusAdapter] = {
    "generate_image": JOBS_API,
    "generate_sound_effect": JOBS_API,
    "generate_speech": JOBS_API,
    "generate_video_from_text": VEO,
    "generate_video_from_image": VEO,
    "generate_music": SUNO,
}
"""Static tool → adapter selection."""
