# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Discovery Backend Errors Module.

Exports:
    ModelInfraErrorContext: Configuration model for bundled error context
    RuntimeHostError: Base infrastructure error class
    ProtocolConfigurationError: Configuration and argument validation errors
    InfraConnectionError: Catalog store unreachable
    InfraConsulError: Catalog store reported a failure
    InfraTimeoutError: Catalog store request timed out
    InfraAuthenticationError: ACL permission denied

Every error raised by HandlerConsul is one of the above and is chained to the
underlying consul/requests exception. Services above the handler never wrap
or swallow them.

Error Sanitization Guidelines:
    NEVER include ACL tokens or full URLs carrying credentials in error
    messages or context. Service ids, service names, operation names and
    correlation IDs are safe.
"""

from consul_discovery.errors.error_consul import InfraConsulError
from consul_discovery.errors.infra_errors import (
    InfraAuthenticationError,
    InfraConnectionError,
    InfraTimeoutError,
    ProtocolConfigurationError,
    RuntimeHostError,
)
from consul_discovery.errors.model_infra_error_context import ModelInfraErrorContext

__all__: list[str] = [
    "ModelInfraErrorContext",
    "RuntimeHostError",
    "ProtocolConfigurationError",
    "InfraConnectionError",
    "InfraConsulError",
    "InfraTimeoutError",
    "InfraAuthenticationError",
]
