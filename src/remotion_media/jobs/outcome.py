# SPDX-License-Identifier: MIT
"""Poll outcomes and per-response status decisions.

A ``StatusDecision`` is what an adapter makes of one status response; a
``PollOutcome`` is the terminal result the poller hands back to the tool.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Union


@dataclass(frozen=True)
class PollSuccess:
    """Job finished; ``result_url`` is the artifact to materialize."""

    result_url: str
    payload: Mapping[str, Any] = field(default_factory=dict)
    attempts: int = 0


@dataclass(frozen=True)
class PollFailure:
    """Job reached a terminal failure, or the status query was rejected."""

    message: str
    attempts: int = 0


@dataclass(frozen=True)
class PollTimeout:
    """Attempt cap exhausted without a terminal state."""

    message: str
    attempts: int


PollOutcome = Union[PollSuccess, PollFailure, PollTimeout]


@dataclass(frozen=True)
class Continue:
    """Not terminal yet; ``note`` is logged before the next attempt."""

    note: str


@dataclass(frozen=True)
class Succeeded:
    result_url: str
    payload: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class Failed:
    message: str


StatusDecision = Union[Continue, Succeeded, Failed]
