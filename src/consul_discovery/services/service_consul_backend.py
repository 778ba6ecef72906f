# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul Discovery Backend.

Composes the catalog client, registrar, heartbeat driver and change watcher
into the single object a sidecar holds for its lifetime. Constructing a new
backend against the same agent is equivalent to a process restart: nothing
but the watcher's signatures lives in the backend, and those are rebuilt on
first use.

Example:
    >>> backend = ServiceConsulBackend.from_address("127.0.0.1:8500")
    >>> backend.send_heartbeat(definition)
    >>> if backend.check_for_upstream_changes("db"):
    ...     rerender()
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from consul_discovery.enums import EnumRegistrationOutcome
from consul_discovery.handlers import HandlerConsul, ModelConsulHandlerConfig
from consul_discovery.models import ModelServiceDefinition
from consul_discovery.services.service_change_watcher import ServiceChangeWatcher
from consul_discovery.services.service_heartbeat_driver import ServiceHeartbeatDriver
from consul_discovery.services.service_registrar import ServiceRegistrar

logger = logging.getLogger(__name__)


class ServiceConsulBackend:
    """Registration, heartbeat and upstream change detection against one agent."""

    def __init__(
        self,
        handler: HandlerConsul,
        config: ModelConsulHandlerConfig | None = None,
    ) -> None:
        config = config or handler.config
        self._handler = handler
        self._registrar = ServiceRegistrar(
            handler, serialize_per_id=config.serialize_per_id
        )
        self._heartbeat = ServiceHeartbeatDriver(handler, self._registrar)
        self._watcher = ServiceChangeWatcher(
            handler,
            degrade_on_query_error=config.degrade_on_query_error,
            watch_wait_seconds=config.watch_wait_seconds,
        )

    @classmethod
    def from_config(cls, config: ModelConsulHandlerConfig) -> ServiceConsulBackend:
        return cls(HandlerConsul.from_config(config), config)

    @classmethod
    def from_address(cls, address: str, **overrides: object) -> ServiceConsulBackend:
        """Build a backend from ``host:port`` or ``scheme://host:port``."""
        return cls.from_config(ModelConsulHandlerConfig.from_address(address, **overrides))

    @property
    def client(self) -> HandlerConsul:
        """The catalog client, for direct reads."""
        return self._handler

    @property
    def registrar(self) -> ServiceRegistrar:
        return self._registrar

    @property
    def heartbeat_driver(self) -> ServiceHeartbeatDriver:
        return self._heartbeat

    @property
    def watcher(self) -> ServiceChangeWatcher:
        return self._watcher

    def send_heartbeat(
        self,
        definition: ModelServiceDefinition,
        correlation_id: UUID | None = None,
    ) -> EnumRegistrationOutcome:
        return self._heartbeat.send_heartbeat(definition, correlation_id)

    def check_for_upstream_changes(
        self,
        service_name: str,
        tag: str = "",
        correlation_id: UUID | None = None,
    ) -> bool:
        return self._watcher.has_changed(service_name, tag, correlation_id)

    def deregister(
        self,
        definition: ModelServiceDefinition,
        correlation_id: UUID | None = None,
    ) -> None:
        """Remove the service from the agent on graceful shutdown."""
        correlation_id = correlation_id or uuid4()
        self._handler.deregister(definition.id, correlation_id)
        self._registrar.release(definition.id)
        logger.info(
            "Deregistered service",
            extra={
                "service_id": definition.id,
                "service_name": definition.name,
                "correlation_id": str(correlation_id),
            },
        )

    def mark_for_maintenance(
        self,
        definition: ModelServiceDefinition,
        enabled: bool = True,
        reason: str | None = None,
        correlation_id: UUID | None = None,
    ) -> None:
        """Put the service into (or take it out of) maintenance mode."""
        correlation_id = correlation_id or uuid4()
        self._handler.set_maintenance(definition.id, enabled, reason, correlation_id)
        logger.info(
            "Service maintenance mode %s",
            "enabled" if enabled else "disabled",
            extra={
                "service_id": definition.id,
                "service_name": definition.name,
                "correlation_id": str(correlation_id),
            },
        )


__all__: list[str] = ["ServiceConsulBackend"]
