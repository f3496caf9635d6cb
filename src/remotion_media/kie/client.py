# SPDX-License-Identifier: MIT
"""Thin async client for the kie.ai generation APIs.

Every kie.ai endpoint answers with an envelope ``{"code", "msg", "data"}``
where ``code == 200`` means the request was accepted, independent of the HTTP
status. The client only forwards the bearer token and returns envelopes; the
meaning of ``data`` is left to the adapters in :mod:`remotion_media.jobs`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import Settings
from ..exceptions import UpstreamRejectedError

logger = logging.getLogger("remotion_media")


class KieClient:
    """One client per tool invocation; use as an async context manager."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        *,
        timeout: float = 120.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers={"Authorization": f"Bearer {api_key}"},
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> KieClient:
        """Build a client from resolved settings.

        Raises:
            ConfigurationError: If KIE_API_KEY is not set
        """
        return cls(
            settings.require_kie_key(),
            settings.kie_api_base,
            timeout=settings.request_timeout,
            transport=settings.transport,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> KieClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Requests
    # ------------------------------------------------------------------

    async def submit(self, path: str, body: dict[str, Any]) -> str:
        """Create a generation task and return its task id.

        Raises:
            UpstreamRejectedError: If the envelope code is not 200 or no task id came back
            httpx.HTTPError: On transport failure or a non-JSON body
        """
        resp = await self._client.post(path, json=body)
        envelope = _decode(resp)
        logger.debug("Submit %s -> %s", path, envelope)

        if envelope.get("code") != 200:
            raise UpstreamRejectedError(envelope.get("code"), str(envelope.get("msg") or envelope))

        task_id = (envelope.get("data") or {}).get("taskId")
        if not task_id:
            raise UpstreamRejectedError(envelope.get("code"), f"No taskId in response: {envelope}")
        return str(task_id)

    async def record_info(self, path: str, task_id: str) -> dict[str, Any]:
        """Query one status envelope for *task_id*."""
        resp = await self._client.get(path, params={"taskId": task_id})
        return _decode(resp)


def _decode(resp: httpx.Response) -> dict[str, Any]:
    """Parse a kie.ai envelope.

    kie.ai reports most errors inside a 200 body; non-JSON bodies are raised
    as HTTP errors.
    """
    try:
        payload = resp.json()
    except ValueError:
        resp.raise_for_status()
        raise httpx.DecodingError(f"Unexpected non-JSON response ({resp.status_code})", request=resp.request) from None
    if not isinstance(payload, dict):
        raise httpx.DecodingError(f"Unexpected response body: {payload!r}", request=resp.request)
    return payload
