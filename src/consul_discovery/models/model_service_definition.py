# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Definition Model.

Identity and registration payload for a service announced by this process.
The model is frozen: a definition's ``id`` never changes once built. An
address or port change after a restart is expressed as a new definition with
the same ``id``, which the registrar detects and re-registers.

Example:
    >>> definition = ModelServiceDefinition(
    ...     id="api-1",
    ...     name="api",
    ...     address="192.168.1.1",
    ...     port=9000,
    ...     ttl=5,
    ... )
    >>> definition.ttl_duration
    '5s'
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from consul_discovery.enums import EnumCheckStatus


class ModelServiceDefinition(BaseModel):
    """Registration payload for one locally-owned service instance.

    Attributes:
        id: Unique instance id, stable across restarts. Also used as the TTL check id.
        name: Logical service name shared by all instances.
        address: IP address announced to the catalog.
        port: Port announced to the catalog.
        ttl: Seconds without a heartbeat before the check turns critical.
        enable_tag_override: Keep catalog-side tag edits across re-registration.
        tags: Tags sent with the registration.
        initial_status: Status of the TTL check right after registration.
        deregister_critical_service_after: Consul duration after which a
            service whose check stays critical is removed by the store.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    id: str = Field(min_length=1, description="Unique, stable instance id")
    name: str = Field(min_length=1, description="Logical service name")
    address: str = Field(description="IP address announced to the catalog")
    port: int = Field(ge=0, le=65535, description="Port announced to the catalog")
    ttl: int = Field(ge=1, description="TTL check window in seconds")
    enable_tag_override: bool = Field(
        default=False,
        description="Preserve catalog-side tag edits across re-registration",
    )
    tags: tuple[str, ...] = Field(
        default=(),
        description="Tags sent with the registration",
    )
    initial_status: EnumCheckStatus | None = Field(
        default=None,
        description="Initial TTL check status (store default is critical)",
    )
    deregister_critical_service_after: str | None = Field(
        default=None,
        description="Consul duration string, e.g. '10m'",
    )

    @field_validator("initial_status")
    @classmethod
    def _reject_maintenance(
        cls, value: EnumCheckStatus | None
    ) -> EnumCheckStatus | None:
        if value is EnumCheckStatus.MAINTENANCE:
            raise ValueError("a TTL check cannot start in maintenance")
        return value

    @property
    def check_id(self) -> str:
        """The TTL check shares the service id."""
        return self.id

    @property
    def ttl_duration(self) -> str:
        return f"{self.ttl}s"


__all__: list[str] = ["ModelServiceDefinition"]
