# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Service Record Model.

Snapshot of a service registration as the Consul agent or catalog reports it.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict, Field


class ModelServiceRecord(BaseModel):
    """Registration currently held by the store for one service id."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str
    name: str
    address: str = ""
    port: int = 0
    tags: tuple[str, ...] = ()
    enable_tag_override: bool = False
    node: str | None = Field(
        default=None,
        description="Node name, only present on catalog records",
    )

    @classmethod
    def from_agent_payload(cls, data: Mapping[str, object]) -> ModelServiceRecord:
        """Build from one value of ``/v1/agent/services``."""
        return cls(
            id=str(data.get("ID") or ""),
            name=str(data.get("Service") or ""),
            address=str(data.get("Address") or ""),
            port=_as_int(data.get("Port")),
            tags=_as_tags(data.get("Tags")),
            enable_tag_override=data.get("EnableTagOverride") is True,
        )

    @classmethod
    def from_catalog_payload(cls, data: Mapping[str, object]) -> ModelServiceRecord:
        """Build from one element of ``/v1/catalog/service/<name>``.

        An empty ServiceAddress means the instance uses its node's address.
        """
        address = data.get("ServiceAddress") or data.get("Address") or ""
        node = data.get("Node")
        return cls(
            id=str(data.get("ServiceID") or ""),
            name=str(data.get("ServiceName") or ""),
            address=str(address),
            port=_as_int(data.get("ServicePort")),
            tags=_as_tags(data.get("ServiceTags")),
            enable_tag_override=data.get("ServiceEnableTagOverride") is True,
            node=node if isinstance(node, str) else None,
        )


def _as_int(value: object) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    try:
        return int(str(value))
    except (TypeError, ValueError):
        return 0


def _as_tags(value: object) -> tuple[str, ...]:
    if not isinstance(value, list):
        return ()
    return tuple(str(tag) for tag in value)


__all__: list[str] = ["ModelServiceRecord"]
