# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Watch State Model."""

from pydantic import BaseModel, ConfigDict, Field

from consul_discovery.models.model_change_signature import ModelChangeSignature


class ModelWatchState(BaseModel):
    """Last state the change watcher stored for one (service name, tag) key."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    signature: ModelChangeSignature
    index: int = Field(default=0, ge=0)


__all__: list[str] = ["ModelWatchState"]
