# SPDX-License-Identifier: MIT
"""Fixed-interval job status polling."""

from __future__ import annotations

import logging

import anyio

from ..kie.client import KieClient
from .adapters import StatusAdapter
from .outcome import Failed, PollFailure, PollOutcome, PollSuccess, PollTimeout, Succeeded

logger = logging.getLogger("remotion_media")


class JobPoller:
    """Watch one kie.ai task until it is terminal or the attempt cap runs out.

    Args:
        client: Open kie.ai client (carries the bearer token)
        adapter: Provider adapter that interprets each status envelope
        interval: Seconds to sleep between non-terminal attempts
        max_attempts: Attempt cap; defaults to the adapter's cap
    """

    def __init__(
        self,
        client: KieClient,
        adapter: StatusAdapter,
        interval: float,
        max_attempts: int | None = None,
    ) -> None:
        self.client = client
        self.adapter = adapter
        self.interval = interval
        self.max_attempts = adapter.max_attempts if max_attempts is None else max_attempts

    async def poll(self, task_id: str) -> PollOutcome:
        """Query status until success, failure, or ``max_attempts`` queries.

        No query is issued after a terminal decision, and no sleep follows
        the last attempt.
        """
        for attempt in range(1, self.max_attempts + 1):
            envelope = await self.client.record_info(self.adapter.status_path, task_id)
            decision = self.adapter.classify(envelope)

            if isinstance(decision, Succeeded):
                logger.info("%s %s succeeded after %d attempt(s)", self.adapter.label, task_id, attempt)
                return PollSuccess(decision.result_url, decision.payload, attempts=attempt)

            if isinstance(decision, Failed):
                logger.info("%s %s failed: %s", self.adapter.label, task_id, decision.message)
                return PollFailure(decision.message, attempts=attempt)

            logger.info("%s %s: %s", self.adapter.label, task_id, decision.note)
            if attempt < self.max_attempts:
                await anyio.sleep(self.interval)

        return PollTimeout(self.adapter.timeout_message, attempts=self.max_attempts)
