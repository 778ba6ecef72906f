# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Change Signature Model.

Fingerprint of a service name's instance set and health, used by the change
watcher to decide whether dependents must re-render.

The signature covers instance identity, placement and aggregated status.
Check output, notes and timestamps are excluded so clock-only updates never
register as changes. Entry order is irrelevant.
"""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from consul_discovery.enums import EnumCheckStatus
from consul_discovery.models.model_catalog_entry import ModelCatalogEntry

InstanceFingerprint = tuple[str, str, str, int, EnumCheckStatus]


class ModelChangeSignature(BaseModel):
    """Opaque, hashable snapshot of a service's catalog state."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    instances: tuple[InstanceFingerprint, ...] = ()

    @classmethod
    def from_entries(cls, entries: Iterable[ModelCatalogEntry]) -> ModelChangeSignature:
        fingerprints = sorted(
            (
                entry.service_id,
                entry.node,
                entry.address,
                entry.port,
                entry.status,
            )
            for entry in entries
        )
        return cls(instances=tuple(fingerprints))

    @classmethod
    def empty(cls) -> ModelChangeSignature:
        return cls()

    @property
    def instance_count(self) -> int:
        return len(self.instances)


__all__: list[str] = ["InstanceFingerprint", "ModelChangeSignature"]
