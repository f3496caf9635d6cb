# SPDX-License-Identifier: MIT
"""Job completion tracking for kie.ai tasks.

Usage::

    from remotion_media.jobs import JobPoller, TOOL_ADAPTERS

    poller = JobPoller(client, TOOL_ADAPTERS["generate_music"], interval=5.0)
    outcome = await poller.poll(task_id)
"""

from .adapters import JOBS_API, SUNO, TOOL_ADAPTERS, VEO, JobsApiAdapter, StatusAdapter, SunoAdapter, VeoAdapter
from .outcome import PollFailure, PollOutcome, PollSuccess, PollTimeout
from .poller import JobPoller

__all__ = [
    "JOBS_API",
    "SUNO",
    "TOOL_ADAPTERS",
    "VEO",
    "JobPoller",
    "JobsApiAdapter",
    "PollFailure",
    "PollOutcome",
    "PollSuccess",
    "PollTimeout",
    "StatusAdapter",
    "SunoAdapter",
    "VeoAdapter",
]
