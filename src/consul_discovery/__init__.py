# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul service-discovery backend.

Registers a process with a Consul agent, keeps it alive with TTL heartbeats,
and detects changes to upstream services for dependent watchers.
"""

from consul_discovery.enums import EnumCheckStatus, EnumRegistrationOutcome
from consul_discovery.handlers import HandlerConsul, ModelConsulHandlerConfig
from consul_discovery.models import ModelServiceDefinition
from consul_discovery.services import (
    ServiceChangeWatcher,
    ServiceConsulBackend,
    ServiceHeartbeatDriver,
    ServiceRegistrar,
)

__version__ = "0.1.0"

__all__: list[str] = [
    "EnumCheckStatus",
    "EnumRegistrationOutcome",
    "HandlerConsul",
    "ModelConsulHandlerConfig",
    "ModelServiceDefinition",
    "ServiceChangeWatcher",
    "ServiceConsulBackend",
    "ServiceHeartbeatDriver",
    "ServiceRegistrar",
]
