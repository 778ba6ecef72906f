# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Enumerations for the Consul discovery backend.

Exports:
    EnumCheckStatus: Consul health check status
    EnumDiscoveryErrorCode: Error classification codes
    EnumInfraTransportType: Transport identifier for error context
    EnumRegistrationOutcome: Result of an ensure-registered pass
"""

from consul_discovery.enums.enum_check_status import EnumCheckStatus
from consul_discovery.enums.enum_discovery_error_code import EnumDiscoveryErrorCode
from consul_discovery.enums.enum_infra_transport_type import EnumInfraTransportType
from consul_discovery.enums.enum_registration_outcome import EnumRegistrationOutcome

__all__: list[str] = [
    "EnumCheckStatus",
    "EnumDiscoveryErrorCode",
    "EnumInfraTransportType",
    "EnumRegistrationOutcome",
]
