# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul-Specific Infrastructure Error Class.

InfraConsulError is raised when the Consul agent answers but reports a
failure (HTTP 4xx/5xx other than ACL denial). It extends InfraConnectionError
so callers handling "store unreachable" also handle "store refused".
"""

from typing import Optional

from consul_discovery.errors.infra_errors import InfraConnectionError
from consul_discovery.errors.model_infra_error_context import ModelInfraErrorContext


class InfraConsulError(InfraConnectionError):
    """Error communicating with Consul.

    Common use cases:
        - Service or check registration rejected by the agent
        - TTL update for a check the agent does not know
        - Catalog or health query failures

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="register",
        ...     target_name="consul_handler",
        ... )
        >>> raise InfraConsulError(
        ...     "Failed to register service with Consul",
        ...     context=context,
        ...     service_name="api-gateway",
        ...     service_id="api-gateway-1",
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        service_name: Optional[str] = None,
        **extra_context: object,
    ) -> None:
        """Initialize InfraConsulError with Consul-specific context.

        Args:
            message: Human-readable error message
            context: Bundled infrastructure context (should use CONSUL transport_type)
            service_name: Optional service name for registration errors
            **extra_context: Additional context information (e.g., service_id)
        """
        if service_name is not None:
            extra_context["service_name"] = service_name

        super().__init__(
            message=message,
            context=context,
            **extra_context,
        )


__all__: list[str] = [
    "InfraConsulError",
]
