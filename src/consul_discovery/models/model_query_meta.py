# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Catalog Query Metadata Model."""

from pydantic import BaseModel, ConfigDict, Field


class ModelQueryMeta(BaseModel):
    """Metadata returned alongside a catalog query.

    Attributes:
        index: The store's X-Consul-Index for the query. It only moves
            forward; 0 means the store did not report one.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    index: int = Field(default=0, ge=0)


__all__: list[str] = ["ModelQueryMeta"]
