# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Data models for the Consul discovery backend."""

from consul_discovery.models.model_catalog_entry import ModelCatalogEntry
from consul_discovery.models.model_change_signature import (
    InstanceFingerprint,
    ModelChangeSignature,
)
from consul_discovery.models.model_health_check import ModelHealthCheck
from consul_discovery.models.model_query_meta import ModelQueryMeta
from consul_discovery.models.model_service_definition import ModelServiceDefinition
from consul_discovery.models.model_service_record import ModelServiceRecord
from consul_discovery.models.model_watch_state import ModelWatchState

__all__: list[str] = [
    "InstanceFingerprint",
    "ModelCatalogEntry",
    "ModelChangeSignature",
    "ModelHealthCheck",
    "ModelQueryMeta",
    "ModelServiceDefinition",
    "ModelServiceRecord",
    "ModelWatchState",
]
