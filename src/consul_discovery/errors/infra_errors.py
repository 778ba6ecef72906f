# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure-Specific Error Classes.

Error Hierarchy:
    RuntimeHostError (base infrastructure error)
    ├── ProtocolConfigurationError
    ├── InfraConnectionError
    │   └── InfraConsulError (see error_consul.py)
    ├── InfraTimeoutError
    └── InfraAuthenticationError

All errors:
    - Carry an EnumDiscoveryErrorCode classification
    - Support proper error chaining with `raise ... from e`
    - Include structured context for debugging
    - Support correlation IDs for request tracking
    - Accept ModelInfraErrorContext for bundled context parameters
"""

from typing import Optional
from uuid import UUID

from consul_discovery.enums import EnumDiscoveryErrorCode
from consul_discovery.errors.model_infra_error_context import ModelInfraErrorContext


class RuntimeHostError(Exception):
    """Base error class for discovery backend infrastructure errors.

    Structured Fields (via ModelInfraErrorContext):
        transport_type: Type of transport (consul)
        operation: Operation being performed
        correlation_id: Request correlation ID for tracking
        target_name: Target resource/endpoint name

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="list_services",
        ...     target_name="consul_handler",
        ... )
        >>> raise RuntimeHostError("Operation failed", context=context)
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[EnumDiscoveryErrorCode] = None,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize RuntimeHostError with structured fields.

        Args:
            message: Human-readable error message
            error_code: Error code (defaults to OPERATION_FAILED)
            context: Bundled infrastructure context (transport_type, operation, etc.)
            **extra_context: Additional context information
        """
        structured_context: dict[str, object] = dict(extra_context)

        correlation_id: Optional[UUID] = None
        if context is not None:
            if context.transport_type is not None:
                structured_context["transport_type"] = context.transport_type
            if context.operation is not None:
                structured_context["operation"] = context.operation
            if context.target_name is not None:
                structured_context["target_name"] = context.target_name
            correlation_id = context.correlation_id

        super().__init__(message)
        self.message = message
        self.error_code = error_code or EnumDiscoveryErrorCode.OPERATION_FAILED
        self.correlation_id = correlation_id
        self.context = structured_context

    def __str__(self) -> str:
        return f"[{self.error_code.value}] {self.message}"


class ProtocolConfigurationError(RuntimeHostError):
    """Raised when configuration or call arguments fail validation.

    Example:
        >>> raise ProtocolConfigurationError(
        ...     "Invalid Consul configuration - validation failed for fields: ['port']",
        ...     context=context,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumDiscoveryErrorCode.INVALID_CONFIGURATION,
            context=context,
            **extra_context,
        )


class InfraConnectionError(RuntimeHostError):
    """Raised when the catalog store cannot be reached.

    Example:
        >>> raise InfraConnectionError(
        ...     "Failed to connect to Consul agent",
        ...     context=context,
        ...     host="consul.example.com",
        ...     port=8500,
        ... )
    """

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        """Initialize InfraConnectionError.

        Args:
            message: Human-readable error message
            context: Bundled infrastructure context
            **extra_context: Additional context information (e.g., host, port)
        """
        super().__init__(
            message=message,
            error_code=EnumDiscoveryErrorCode.CONNECTION_ERROR,
            context=context,
            **extra_context,
        )


class InfraTimeoutError(RuntimeHostError):
    """Raised when a catalog store request exceeds its timeout."""

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumDiscoveryErrorCode.TIMEOUT_ERROR,
            context=context,
            **extra_context,
        )


class InfraAuthenticationError(RuntimeHostError):
    """Raised when the catalog store rejects the ACL token."""

    def __init__(
        self,
        message: str,
        context: Optional[ModelInfraErrorContext] = None,
        **extra_context: object,
    ) -> None:
        super().__init__(
            message=message,
            error_code=EnumDiscoveryErrorCode.AUTHENTICATION_ERROR,
            context=context,
            **extra_context,
        )


__all__ = [
    "RuntimeHostError",
    "ProtocolConfigurationError",
    "InfraConnectionError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
]
