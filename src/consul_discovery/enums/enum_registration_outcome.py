# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Registration Outcome Enumeration."""

from enum import Enum


class EnumRegistrationOutcome(str, Enum):
    """What ServiceRegistrar.ensure_registered did for a definition.

    Attributes:
        REGISTERED: Service was not known to the agent and was registered
        REREGISTERED: Agent held a stale address or port; registration was rewritten
        UNCHANGED: Agent registration matched, nothing was written
    """

    REGISTERED = "registered"
    REREGISTERED = "reregistered"
    UNCHANGED = "unchanged"

    @property
    def wrote(self) -> bool:
        return self is not EnumRegistrationOutcome.UNCHANGED


__all__ = ["EnumRegistrationOutcome"]
