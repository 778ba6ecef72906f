# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Registrar.

Keeps the agent's registration of a locally-owned service in line with its
ModelServiceDefinition. The store is authoritative: the registrar reads the
current registration on every call instead of caching what it wrote, so a
freshly constructed registrar (a restarted process) converges the same way a
long-lived one does.

Decision table for ``ensure_registered``:

    ===========================  ==============  =====================
    Agent state for definition   Write issued    Outcome
    ===========================  ==============  =====================
    absent                       register        REGISTERED
    address or port differs      register        REREGISTERED
    same, TTL check missing      register        REGISTERED
    same, TTL check present      none            UNCHANGED
    ===========================  ==============  =====================

Thread Safety:
    With ``serialize_per_id`` enabled, concurrent calls for the same service
    id inside one process are serialized by a per-id threading.Lock so they
    cannot race duplicate registrations. Calls for different ids never wait
    on each other. Across processes the store's per-id write serialization is
    the only guard, and last write wins.
    ``release`` drops the lock of a service id that is no longer owned.
"""

from __future__ import annotations

import logging
import threading
from contextlib import AbstractContextManager, nullcontext
from uuid import UUID, uuid4

from consul_discovery.enums import EnumRegistrationOutcome
from consul_discovery.handlers import HandlerConsul
from consul_discovery.models import ModelServiceDefinition, ModelServiceRecord

logger = logging.getLogger(__name__)


class ServiceRegistrar:
    """Registers a service definition when the agent lacks it or holds a stale copy.

    Example:
        >>> registrar = ServiceRegistrar(handler)
        >>> registrar.ensure_registered(definition)
        <EnumRegistrationOutcome.REGISTERED: 'registered'>
        >>> registrar.ensure_registered(definition)
        <EnumRegistrationOutcome.UNCHANGED: 'unchanged'>
    """

    def __init__(self, handler: HandlerConsul, serialize_per_id: bool = True) -> None:
        self._handler = handler
        self._serialize_per_id = serialize_per_id
        self._id_locks: dict[str, threading.Lock] = {}
        self._id_locks_guard = threading.Lock()

    def ensure_registered(
        self,
        definition: ModelServiceDefinition,
        correlation_id: UUID | None = None,
    ) -> EnumRegistrationOutcome:
        """Register ``definition`` unless the agent already holds it unchanged.

        Raises:
            RuntimeHostError: Any transport failure from the handler, unchanged.
        """
        correlation_id = correlation_id or uuid4()
        with self._lock_for(definition.id):
            current = self._handler.list_services(correlation_id).get(definition.id)
            outcome = self._decide(definition, current)
            check_missing = False
            if not outcome.wrote:
                checks = self._handler.list_checks(correlation_id)
                check_missing = definition.check_id not in checks
                if not check_missing:
                    return outcome
                outcome = EnumRegistrationOutcome.REGISTERED

            self._handler.register(definition, correlation_id)

        if check_missing:
            logger.info(
                "Re-registered service with missing TTL check",
                extra={
                    "service_id": definition.id,
                    "service_name": definition.name,
                    "check_id": definition.check_id,
                    "correlation_id": str(correlation_id),
                },
            )
        elif outcome is EnumRegistrationOutcome.REREGISTERED and current is not None:
            logger.info(
                "Re-registered service with changed address",
                extra={
                    "service_id": definition.id,
                    "service_name": definition.name,
                    "previous_address": f"{current.address}:{current.port}",
                    "address": f"{definition.address}:{definition.port}",
                    "correlation_id": str(correlation_id),
                },
            )
        else:
            logger.info(
                "Registered service",
                extra={
                    "service_id": definition.id,
                    "service_name": definition.name,
                    "address": f"{definition.address}:{definition.port}",
                    "correlation_id": str(correlation_id),
                },
            )
        return outcome

    @staticmethod
    def _decide(
        definition: ModelServiceDefinition, current: ModelServiceRecord | None
    ) -> EnumRegistrationOutcome:
        if current is None:
            return EnumRegistrationOutcome.REGISTERED
        if current.address != definition.address or current.port != definition.port:
            return EnumRegistrationOutcome.REREGISTERED
        return EnumRegistrationOutcome.UNCHANGED

    def release(self, service_id: str) -> None:
        """Forget the per-id lock of a service this process no longer owns."""
        with self._id_locks_guard:
            self._id_locks.pop(service_id, None)

    def _lock_for(self, service_id: str) -> AbstractContextManager[object]:
        if not self._serialize_per_id:
            return nullcontext()
        with self._id_locks_guard:
            lock = self._id_locks.get(service_id)
            if lock is None:
                lock = threading.Lock()
                self._id_locks[service_id] = lock
        return lock


__all__: list[str] = ["ServiceRegistrar"]
