# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Infrastructure Error Context Configuration Model.

Bundles the structured fields shared by every infrastructure error so error
constructors keep a short parameter list.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from consul_discovery.enums import EnumInfraTransportType


class ModelInfraErrorContext(BaseModel):
    """Configuration model for infrastructure error context.

    Attributes:
        transport_type: Transport the failing operation used
        operation: Operation being performed (register, list_services, ...)
        target_name: Target resource or endpoint name
        correlation_id: Request correlation ID for distributed tracing

    Example:
        >>> context = ModelInfraErrorContext(
        ...     transport_type=EnumInfraTransportType.CONSUL,
        ...     operation="register",
        ...     target_name="consul_handler",
        ...     correlation_id=uuid4(),
        ... )
        >>> raise InfraConsulError("Service registration failed", context=context)
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    transport_type: Optional[EnumInfraTransportType] = Field(
        default=None,
        description="Type of infrastructure transport",
    )
    operation: Optional[str] = Field(
        default=None,
        description="Operation being performed",
    )
    target_name: Optional[str] = Field(
        default=None,
        description="Target resource or endpoint name",
    )
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="Request correlation ID for distributed tracing",
    )


__all__ = ["ModelInfraErrorContext"]
