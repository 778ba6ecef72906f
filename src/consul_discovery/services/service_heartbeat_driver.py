# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Heartbeat Driver.

Passes the TTL check of a locally-owned service, registering it first when
the agent does not know it (or knows a stale address). Callers never need a
separate first-time setup step.

Each ``send_heartbeat`` call issues at most one registration and exactly one
check update. The driver owns no timer: an external scheduler calls it at an
interval well under the TTL (``recommended_interval`` gives ttl / 3).

Failure Semantics:
    If registration succeeds and the check update fails, the error is raised
    and the service stays registered. Its check then goes critical through
    the store's own TTL expiry, which is visible to watchers.
"""

from __future__ import annotations

import logging
from uuid import UUID, uuid4

from consul_discovery.enums import EnumCheckStatus, EnumRegistrationOutcome
from consul_discovery.handlers import HandlerConsul
from consul_discovery.models import ModelServiceDefinition
from consul_discovery.services.service_registrar import ServiceRegistrar

logger = logging.getLogger(__name__)

HEARTBEAT_NOTE: str = "heartbeat"

HEARTBEATS_PER_TTL: int = 3


class ServiceHeartbeatDriver:
    """Keeps a service registered and its TTL check passing."""

    def __init__(self, handler: HandlerConsul, registrar: ServiceRegistrar) -> None:
        self._handler = handler
        self._registrar = registrar

    def send_heartbeat(
        self,
        definition: ModelServiceDefinition,
        correlation_id: UUID | None = None,
    ) -> EnumRegistrationOutcome:
        """Ensure registration, then mark the TTL check passing.

        Returns:
            What the registration step did.

        Raises:
            RuntimeHostError: Transport failure from either step, unchanged.
        """
        correlation_id = correlation_id or uuid4()
        outcome = self._registrar.ensure_registered(definition, correlation_id)
        self._handler.update_check_status(
            definition.check_id,
            HEARTBEAT_NOTE,
            EnumCheckStatus.PASSING,
            correlation_id,
        )
        logger.debug(
            "Heartbeat sent",
            extra={
                "service_id": definition.id,
                "registration": outcome.value,
                "correlation_id": str(correlation_id),
            },
        )
        return outcome

    @staticmethod
    def recommended_interval(definition: ModelServiceDefinition) -> float:
        """Seconds between heartbeats that leave room for two missed beats."""
        return definition.ttl / HEARTBEATS_PER_TTL


__all__: list[str] = ["ServiceHeartbeatDriver"]
