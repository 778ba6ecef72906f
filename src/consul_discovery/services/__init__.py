# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Discovery services built on the Consul catalog client.

Exports:
    ServiceRegistrar: Registers a definition when absent or stale
    ServiceHeartbeatDriver: Registers if needed, then passes the TTL check
    ServiceChangeWatcher: Per (name, tag) upstream change detection
    ServiceConsulBackend: Facade composing the three above
"""

from consul_discovery.services.service_change_watcher import ServiceChangeWatcher
from consul_discovery.services.service_consul_backend import ServiceConsulBackend
from consul_discovery.services.service_heartbeat_driver import ServiceHeartbeatDriver
from consul_discovery.services.service_registrar import ServiceRegistrar

__all__: list[str] = [
    "ServiceChangeWatcher",
    "ServiceConsulBackend",
    "ServiceHeartbeatDriver",
    "ServiceRegistrar",
]
