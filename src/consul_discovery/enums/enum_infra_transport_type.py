# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Transport Type Enumeration.

Identifies the transport a failed operation went through. Used for error
context and log filtering.
"""

from enum import Enum


class EnumInfraTransportType(str, Enum):
    """Transport types used by the discovery backend.

    Attributes:
        CONSUL: Consul agent HTTP API
    """

    CONSUL = "consul"


__all__ = ["EnumInfraTransportType"]
