# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Discovery Error Code Enumeration.

Classification codes attached to every RuntimeHostError.
"""

from enum import Enum


class EnumDiscoveryErrorCode(str, Enum):
    """Error codes for discovery backend failures."""

    OPERATION_FAILED = "OPERATION_FAILED"
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    TIMEOUT_ERROR = "TIMEOUT_ERROR"
    AUTHENTICATION_ERROR = "AUTHENTICATION_ERROR"


__all__ = ["EnumDiscoveryErrorCode"]
