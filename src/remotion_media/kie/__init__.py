# SPDX-License-Identifier: MIT
"""kie.ai HTTP client."""

from .client import KieClient

__all__ = ["KieClient"]
