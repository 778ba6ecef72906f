# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Health Check Status Enumeration.

Mirrors the status strings reported by Consul for agent and catalog checks.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum


class EnumCheckStatus(str, Enum):
    """Status of a Consul health check.

    Attributes:
        PASSING: Check is healthy
        WARNING: Check reported a warning
        CRITICAL: Check failed or its TTL expired
        MAINTENANCE: Service or node is in maintenance mode
    """

    PASSING = "passing"
    WARNING = "warning"
    CRITICAL = "critical"
    MAINTENANCE = "maintenance"

    @property
    def severity(self) -> int:
        """Rank used when folding several checks into one status."""
        return _SEVERITY[self]

    @classmethod
    def aggregate(cls, statuses: Iterable[EnumCheckStatus]) -> EnumCheckStatus:
        """Return the worst status, or PASSING when there are no checks."""
        worst = cls.PASSING
        for status in statuses:
            if status.severity > worst.severity:
                worst = status
        return worst


_SEVERITY: dict[EnumCheckStatus, int] = {
    EnumCheckStatus.PASSING: 0,
    EnumCheckStatus.WARNING: 1,
    EnumCheckStatus.CRITICAL: 2,
    EnumCheckStatus.MAINTENANCE: 3,
}


__all__ = ["EnumCheckStatus"]
