# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Health Check Model.

Server-side check record tied to a service id. TTL expiry and the
passing-on-heartbeat transition are enforced by the store, not by this model.
"""

from __future__ import annotations

from collections.abc import Mapping

from pydantic import BaseModel, ConfigDict

from consul_discovery.enums import EnumCheckStatus


class ModelHealthCheck(BaseModel):
    """One agent check as reported by ``/v1/agent/checks``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    check_id: str
    name: str = ""
    service_id: str = ""
    status: EnumCheckStatus
    notes: str = ""
    output: str = ""

    @classmethod
    def from_agent_payload(cls, data: Mapping[str, object]) -> ModelHealthCheck:
        return cls(
            check_id=str(data.get("CheckID") or ""),
            name=str(data.get("Name") or ""),
            service_id=str(data.get("ServiceID") or ""),
            status=EnumCheckStatus(str(data.get("Status") or "critical")),
            notes=str(data.get("Notes") or ""),
            output=str(data.get("Output") or ""),
        )


__all__: list[str] = ["ModelHealthCheck"]
