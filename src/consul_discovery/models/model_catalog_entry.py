# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog Entry Model.

One service instance returned by a health-aware catalog query
(``/v1/health/service/<name>``), with its checks folded into one status.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field

from consul_discovery.enums import EnumCheckStatus
from consul_discovery.models.model_service_record import ModelServiceRecord


class ModelCatalogEntry(BaseModel):
    """A service instance and its aggregated health.

    Attributes:
        node: Node the instance is registered on.
        service_id: Instance id.
        service_name: Logical service name.
        address: Instance address, or the node address when the service has none.
        port: Instance port.
        tags: Instance tags.
        enable_tag_override: Tag override flag as stored by the catalog.
        status: Worst status over every check attached to the entry.
        check_statuses: Status per check id.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    node: str = ""
    service_id: str
    service_name: str
    address: str = ""
    port: int = 0
    tags: tuple[str, ...] = ()
    enable_tag_override: bool = False
    status: EnumCheckStatus = EnumCheckStatus.PASSING
    check_statuses: dict[str, EnumCheckStatus] = Field(default_factory=dict)

    @classmethod
    def from_health_payload(cls, data: Mapping[str, object]) -> ModelCatalogEntry:
        node_data = data.get("Node")
        service_data = data.get("Service")
        checks_data = data.get("Checks")
        node: Mapping[str, object] = node_data if isinstance(node_data, Mapping) else {}
        service: Mapping[str, object] = (
            service_data if isinstance(service_data, Mapping) else {}
        )

        check_statuses: dict[str, EnumCheckStatus] = {}
        if isinstance(checks_data, list):
            for check in checks_data:
                if not isinstance(check, Mapping):
                    continue
                check_id = str(check.get("CheckID") or "")
                check_statuses[check_id] = EnumCheckStatus(
                    str(check.get("Status") or "critical")
                )

        record = ModelServiceRecord.from_agent_payload(service)
        return cls(
            node=str(node.get("Node") or ""),
            service_id=record.id,
            service_name=record.name,
            address=record.address or str(node.get("Address") or ""),
            port=record.port,
            tags=record.tags,
            enable_tag_override=record.enable_tag_override,
            status=EnumCheckStatus.aggregate(check_statuses.values()),
            check_statuses=check_statuses,
        )


__all__: list[str] = ["ModelCatalogEntry"]
