# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""HashiCorp Consul catalog client using the python-consul library.

HandlerConsul is the transport layer of the discovery backend: every public
method is one synchronous round trip (two for ``register``, which writes the
service and its TTL check) against the Consul agent HTTP API. There is no
retry, caching or policy here; failures are translated once into the
infrastructure error hierarchy and raised to the caller.

Supported Operations:
    - register: Register a service and its TTL check with the agent
    - deregister: Remove a service from the agent
    - set_maintenance: Toggle service maintenance mode
    - list_services: Agent-local service registrations keyed by id
    - list_checks: Agent-local checks keyed by check id
    - update_check_status: Pass, warn or fail a TTL check
    - query_catalog: Health-aware catalog query for a service name and tag
    - catalog_service: Raw catalog records for a service name and tag

Error Mapping:
    - consul.ACLPermissionDenied -> InfraAuthenticationError
    - consul.Timeout, requests Timeout -> InfraTimeoutError
    - requests ConnectionError -> InfraConnectionError
    - any other consul.ConsulException -> InfraConsulError
    - agent answered but did not acknowledge a write -> InfraConsulError
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Mapping
from typing import TypeVar
from uuid import UUID, uuid4

import consul
import requests

from consul_discovery.enums import EnumCheckStatus, EnumInfraTransportType
from consul_discovery.errors import (
    InfraAuthenticationError,
    InfraConnectionError,
    InfraConsulError,
    InfraTimeoutError,
    ModelInfraErrorContext,
    ProtocolConfigurationError,
    RuntimeHostError,
)
from consul_discovery.handlers.model_consul_handler_config import (
    ModelConsulHandlerConfig,
)
from consul_discovery.models import (
    ModelCatalogEntry,
    ModelHealthCheck,
    ModelQueryMeta,
    ModelServiceDefinition,
    ModelServiceRecord,
)

T = TypeVar("T")

logger = logging.getLogger(__name__)

HANDLER_TYPE_CONSUL: str = "consul"

TARGET_NAME: str = "consul_handler"

SUPPORTED_OPERATIONS: frozenset[str] = frozenset(
    {
        "register",
        "deregister",
        "set_maintenance",
        "list_services",
        "list_checks",
        "update_check_status",
        "query_catalog",
        "catalog_service",
    }
)


class HandlerConsul:
    """Thin synchronous client over the Consul agent, health and catalog APIs.

    The handler holds no state besides the python-consul client; two handlers
    pointed at the same agent observe the same registrations, which is how a
    process restart is modelled.

    Thread Safety:
        python-consul issues each call through a requests session. Calls from
        several threads are independent round trips; the handler adds no
        locking of its own.

    Example:
        >>> handler = HandlerConsul.from_config(
        ...     ModelConsulHandlerConfig.from_address("127.0.0.1:8500")
        ... )
        >>> handler.register(definition)
        >>> handler.update_check_status(definition.check_id, "heartbeat", EnumCheckStatus.PASSING)
    """

    def __init__(
        self,
        client: consul.Consul,
        config: ModelConsulHandlerConfig | None = None,
    ) -> None:
        """Wrap an existing python-consul client.

        Args:
            client: Configured consul.Consul instance.
            config: Configuration the client was built from. Only the
                datacenter is read from it for catalog queries.
        """
        self._client = client
        self._config = config or ModelConsulHandlerConfig()

    @classmethod
    def from_config(cls, config: ModelConsulHandlerConfig) -> HandlerConsul:
        """Create a handler and its python-consul client from configuration."""
        token_value: str | None = None
        if config.token is not None:
            token_value = config.token.get_secret_value()

        client = consul.Consul(
            host=config.host,
            port=config.port,
            scheme=config.scheme,
            token=token_value,
            dc=config.datacenter,
            verify=config.verify_ssl,
        )
        logger.debug(
            "Created Consul client",
            extra={
                "host": config.host,
                "port": config.port,
                "scheme": config.scheme,
                "datacenter": config.datacenter,
            },
        )
        return cls(client, config)

    @property
    def handler_type(self) -> str:
        return HANDLER_TYPE_CONSUL

    @property
    def config(self) -> ModelConsulHandlerConfig:
        return self._config

    # Writes

    def register(
        self,
        definition: ModelServiceDefinition,
        correlation_id: UUID | None = None,
    ) -> None:
        """Register a service and its TTL check, overwriting any prior registration.

        The check id equals the service id so heartbeats can address it by
        the service id alone.
        """
        correlation_id = correlation_id or uuid4()
        check = consul.Check.ttl(definition.ttl_duration)
        if definition.initial_status is not None:
            check["Status"] = definition.initial_status.value
        if definition.deregister_critical_service_after is not None:
            check["DeregisterCriticalServiceAfter"] = (
                definition.deregister_critical_service_after
            )

        def register_service() -> bool:
            result: bool = self._client.agent.service.register(
                definition.name,
                service_id=definition.id,
                address=definition.address,
                port=definition.port,
                tags=list(definition.tags) or None,
                enable_tag_override=definition.enable_tag_override,
            )
            return result

        def register_check() -> bool:
            result: bool = self._client.agent.check.register(
                definition.check_id,
                check=check,
                check_id=definition.check_id,
                notes=f"TTL for {definition.name} set by consul_discovery",
                service_id=definition.id,
            )
            return result

        self._require_ack(
            self._execute("register", register_service, correlation_id),
            "register",
            correlation_id,
            service_id=definition.id,
        )
        self._require_ack(
            self._execute("register", register_check, correlation_id),
            "register",
            correlation_id,
            service_id=definition.id,
        )
        logger.debug(
            "Registered service and TTL check",
            extra={
                "service_id": definition.id,
                "service_name": definition.name,
                "ttl": definition.ttl_duration,
                "correlation_id": str(correlation_id),
            },
        )

    def deregister(self, service_id: str, correlation_id: UUID | None = None) -> None:
        """Remove a service (and its checks) from the agent."""
        correlation_id = correlation_id or uuid4()
        result = self._execute(
            "deregister",
            lambda: self._client.agent.service.deregister(service_id),
            correlation_id,
        )
        self._require_ack(result, "deregister", correlation_id, service_id=service_id)

    def set_maintenance(
        self,
        service_id: str,
        enabled: bool,
        reason: str | None = None,
        correlation_id: UUID | None = None,
    ) -> None:
        """Enable or disable maintenance mode for a service."""
        correlation_id = correlation_id or uuid4()
        result = self._execute(
            "set_maintenance",
            lambda: self._client.agent.service.maintenance(
                service_id, "true" if enabled else "false", reason=reason
            ),
            correlation_id,
        )
        self._require_ack(
            result, "set_maintenance", correlation_id, service_id=service_id
        )

    def update_check_status(
        self,
        check_id: str,
        note: str,
        status: EnumCheckStatus,
        correlation_id: UUID | None = None,
    ) -> None:
        """Set a TTL check to passing, warning or critical with a note.

        Raises:
            ProtocolConfigurationError: If status is MAINTENANCE, which a
                TTL update cannot set.
        """
        correlation_id = correlation_id or uuid4()
        updaters: dict[EnumCheckStatus, Callable[..., bool]] = {
            EnumCheckStatus.PASSING: self._client.agent.check.ttl_pass,
            EnumCheckStatus.WARNING: self._client.agent.check.ttl_warn,
            EnumCheckStatus.CRITICAL: self._client.agent.check.ttl_fail,
        }
        updater = updaters.get(status)
        if updater is None:
            raise ProtocolConfigurationError(
                f"TTL checks cannot be set to '{status.value}'",
                context=self._error_context("update_check_status", correlation_id),
                check_id=check_id,
            )

        result = self._execute(
            "update_check_status",
            lambda: updater(check_id, notes=note),
            correlation_id,
        )
        self._require_ack(
            result, "update_check_status", correlation_id, check_id=check_id
        )

    # Reads

    def list_services(
        self, correlation_id: UUID | None = None
    ) -> dict[str, ModelServiceRecord]:
        """Return the agent's service registrations keyed by service id."""
        correlation_id = correlation_id or uuid4()
        raw: Mapping[str, Mapping[str, object]] = self._execute(
            "list_services", self._client.agent.services, correlation_id
        )
        return {
            service_id: ModelServiceRecord.from_agent_payload(data)
            for service_id, data in (raw or {}).items()
        }

    def list_checks(
        self, correlation_id: UUID | None = None
    ) -> dict[str, ModelHealthCheck]:
        """Return the agent's checks keyed by check id."""
        correlation_id = correlation_id or uuid4()
        raw: Mapping[str, Mapping[str, object]] = self._execute(
            "list_checks", self._client.agent.checks, correlation_id
        )
        return {
            check_id: ModelHealthCheck.from_agent_payload(data)
            for check_id, data in (raw or {}).items()
        }

    def query_catalog(
        self,
        name: str,
        tag: str = "",
        index: int | None = None,
        wait_seconds: float | None = None,
        correlation_id: UUID | None = None,
    ) -> tuple[list[ModelCatalogEntry], ModelQueryMeta]:
        """Query every instance of a service with its aggregated health.

        Args:
            name: Service name.
            tag: Tag filter; empty means no filter.
            index: Catalog index from a previous query. With wait_seconds,
                turns the call into a blocking query.
            wait_seconds: Longest time a blocking query may wait.
            correlation_id: Correlation ID for tracing.

        Returns:
            Entries in the order the store returned them, and query metadata.
        """
        correlation_id = correlation_id or uuid4()
        wait = _as_wait(wait_seconds) if index else None

        def query_func() -> tuple[int, list[Mapping[str, object]]]:
            result: tuple[int, list[Mapping[str, object]]] = self._client.health.service(
                name,
                index=index if wait else None,
                wait=wait,
                tag=tag or None,
                dc=self._config.datacenter,
            )
            return result

        raw_index, nodes = self._execute("query_catalog", query_func, correlation_id)
        entries = [ModelCatalogEntry.from_health_payload(node) for node in nodes or []]
        return entries, ModelQueryMeta(index=_as_index(raw_index))

    def catalog_service(
        self,
        name: str,
        tag: str = "",
        correlation_id: UUID | None = None,
    ) -> list[ModelServiceRecord]:
        """Return catalog-side records for a service name and optional tag."""
        correlation_id = correlation_id or uuid4()

        def catalog_func() -> tuple[int, list[Mapping[str, object]]]:
            result: tuple[int, list[Mapping[str, object]]] = self._client.catalog.service(
                name,
                tag=tag or None,
                dc=self._config.datacenter,
            )
            return result

        _, records = self._execute("catalog_service", catalog_func, correlation_id)
        return [ModelServiceRecord.from_catalog_payload(r) for r in records or []]

    # Transport

    def _execute(self, operation: str, func: Callable[[], T], correlation_id: UUID) -> T:
        """Run one python-consul call, translating its failures."""
        try:
            return func()
        except Exception as e:
            error = self._translate_error(e, operation, correlation_id)
            if error is None:
                raise
            logger.debug(
                "Consul operation failed",
                extra={
                    "operation": operation,
                    "error_type": type(e).__name__,
                    "correlation_id": str(correlation_id),
                },
            )
            raise error from e

    def _translate_error(
        self, error: Exception, operation: str, correlation_id: UUID
    ) -> RuntimeHostError | None:
        """Map a python-consul or requests exception to an infrastructure error.

        Returns None for exceptions that are not transport failures (they
        propagate untouched).
        """
        ctx = self._error_context(operation, correlation_id)

        if isinstance(error, consul.ACLPermissionDenied):
            return InfraAuthenticationError(
                "Consul ACL permission denied - check token permissions",
                context=ctx,
            )
        if isinstance(error, (consul.Timeout, requests.exceptions.Timeout)):
            return InfraTimeoutError(
                f"Consul timeout: {type(error).__name__}",
                context=ctx,
            )
        if isinstance(error, requests.exceptions.ConnectionError):
            return InfraConnectionError(
                f"Consul connection failed: {type(error).__name__}",
                context=ctx,
                host=self._config.host,
                port=self._config.port,
            )
        if isinstance(error, consul.ConsulException):
            return InfraConsulError(
                f"Consul error: {error}",
                context=ctx,
            )
        if isinstance(error, requests.exceptions.RequestException):
            return InfraConnectionError(
                f"Consul request failed: {type(error).__name__}",
                context=ctx,
            )
        return None

    def _require_ack(
        self,
        result: object,
        operation: str,
        correlation_id: UUID,
        **extra_context: object,
    ) -> None:
        """Raise when the agent answered a write without acknowledging it."""
        if result is False:
            raise InfraConsulError(
                f"Consul did not acknowledge '{operation}'",
                context=self._error_context(operation, correlation_id),
                **extra_context,
            )

    def _error_context(
        self, operation: str, correlation_id: UUID
    ) -> ModelInfraErrorContext:
        return ModelInfraErrorContext(
            transport_type=EnumInfraTransportType.CONSUL,
            operation=operation,
            target_name=TARGET_NAME,
            correlation_id=correlation_id,
        )

    def describe(self) -> dict[str, object]:
        """Return handler metadata and capabilities (no credentials)."""
        return {
            "handler_type": self.handler_type,
            "supported_operations": sorted(SUPPORTED_OPERATIONS),
            "host": self._config.host,
            "port": self._config.port,
            "datacenter": self._config.datacenter,
        }


def _as_wait(wait_seconds: float | None) -> str | None:
    if wait_seconds is None:
        return None
    return f"{max(1, math.ceil(wait_seconds))}s"


def _as_index(value: object) -> int:
    try:
        index = int(str(value))
    except (TypeError, ValueError):
        return 0
    return max(index, 0)


__all__: list[str] = ["HandlerConsul"]
