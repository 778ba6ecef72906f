# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul Handler Configuration Model.

Pydantic configuration for the Consul catalog client and the services built
on top of it.

Security Note:
    The token field uses SecretStr to prevent accidental logging of the ACL
    token. Tokens should come from the environment (CONSUL_HTTP_TOKEN), never
    from checked-in configuration.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import Literal
from urllib.parse import urlsplit
from uuid import uuid4

from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError

from consul_discovery.enums import EnumInfraTransportType
from consul_discovery.errors import ModelInfraErrorContext, ProtocolConfigurationError

DEFAULT_CONSUL_PORT: int = 8500

ENV_CONSUL_HTTP_ADDR: str = "CONSUL_HTTP_ADDR"
ENV_CONSUL_HTTP_TOKEN: str = "CONSUL_HTTP_TOKEN"
ENV_CONSUL_DATACENTER: str = "CONSUL_DATACENTER"


class ModelConsulHandlerConfig(BaseModel):
    """Configuration for the Consul catalog client.

    Attributes:
        host: Consul agent hostname (default "localhost")
        port: Consul agent HTTP port (default 8500)
        scheme: "http" or "https"
        token: Optional ACL token (SecretStr)
        datacenter: Optional datacenter for catalog queries
        verify_ssl: Verify TLS certificates when scheme is https
        degrade_on_query_error: Change watcher reports "no change" instead of
            raising when a catalog query fails
        watch_wait_seconds: When set, change watcher issues blocking queries
            that wait up to this long for the catalog index to move
        serialize_per_id: Registrar serializes concurrent calls per service id

    Example:
        >>> config = ModelConsulHandlerConfig.from_address("127.0.0.1:8500")
        >>> config.port
        8500
        >>> print(ModelConsulHandlerConfig(token=SecretStr("abc")).token)
        **********
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    host: str = Field(default="localhost", min_length=1)
    port: int = Field(default=DEFAULT_CONSUL_PORT, ge=1, le=65535)
    scheme: Literal["http", "https"] = Field(default="http")
    token: SecretStr | None = Field(
        default=None,
        description="Consul ACL token (use SecretStr for security)",
    )
    datacenter: str | None = Field(default=None)
    verify_ssl: bool = Field(default=True)
    degrade_on_query_error: bool = Field(
        default=False,
        description="Treat watcher query failures as 'no change' instead of raising",
    )
    watch_wait_seconds: float | None = Field(
        default=None,
        gt=0.0,
        le=600.0,
        description="Blocking query wait for the change watcher (None = plain polling)",
    )
    serialize_per_id: bool = Field(
        default=True,
        description="Serialize concurrent registrar calls for the same service id",
    )

    @classmethod
    def from_mapping(cls, raw: Mapping[str, object]) -> ModelConsulHandlerConfig:
        """Validate a raw mapping, raising ProtocolConfigurationError on failure.

        Only the names of invalid fields are reported; values (tokens in
        particular) never reach the error message.
        """
        data = dict(raw)
        token_raw = data.get("token")
        if isinstance(token_raw, str):
            data["token"] = SecretStr(token_raw)
        try:
            return cls.model_validate(data)
        except ValidationError as e:
            ctx = ModelInfraErrorContext(
                transport_type=EnumInfraTransportType.CONSUL,
                operation="validate_config",
                target_name="consul_handler",
                correlation_id=uuid4(),
            )
            sanitized_fields = [err.get("loc", ("unknown",))[-1] for err in e.errors()]
            raise ProtocolConfigurationError(
                f"Invalid Consul configuration - validation failed for fields: {sanitized_fields}",
                context=ctx,
            ) from e

    @classmethod
    def from_address(
        cls, address: str, **overrides: object
    ) -> ModelConsulHandlerConfig:
        """Build a config from ``host:port`` or ``scheme://host:port``.

        Args:
            address: Agent address. A missing port defaults to 8500.
            **overrides: Any other config field.
        """
        address = address.strip()
        if not address:
            raise ProtocolConfigurationError(
                "Consul address must not be empty",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.CONSUL,
                    operation="validate_config",
                    target_name="consul_handler",
                ),
            )
        target = address if "://" in address else f"http://{address}"
        try:
            parts = urlsplit(target)
            port = parts.port
        except ValueError as e:
            raise ProtocolConfigurationError(
                "Consul address has an invalid port",
                context=ModelInfraErrorContext(
                    transport_type=EnumInfraTransportType.CONSUL,
                    operation="validate_config",
                    target_name="consul_handler",
                ),
            ) from e

        data: dict[str, object] = {
            "host": parts.hostname or "",
            "port": port or DEFAULT_CONSUL_PORT,
        }
        if "://" in address:
            data["scheme"] = parts.scheme
        data.update(overrides)
        return cls.from_mapping(data)

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: object
    ) -> ModelConsulHandlerConfig:
        """Build a config from the standard Consul environment variables.

        Reads CONSUL_HTTP_ADDR, CONSUL_HTTP_TOKEN and CONSUL_DATACENTER.
        Explicit overrides win over the environment.
        """
        env = os.environ if environ is None else environ
        values: dict[str, object] = {}
        token = env.get(ENV_CONSUL_HTTP_TOKEN)
        if token:
            values["token"] = token
        datacenter = env.get(ENV_CONSUL_DATACENTER)
        if datacenter:
            values["datacenter"] = datacenter
        values.update(overrides)

        address = env.get(ENV_CONSUL_HTTP_ADDR)
        if address:
            return cls.from_address(address, **values)
        return cls.from_mapping(values)


__all__: list[str] = ["ModelConsulHandlerConfig"]
