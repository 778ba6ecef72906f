# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Consul transport handlers.

Exports:
    HandlerConsul: Synchronous catalog client over python-consul
    ModelConsulHandlerConfig: Connection and policy configuration
"""

from consul_discovery.handlers.handler_consul import HandlerConsul
from consul_discovery.handlers.model_consul_handler_config import (
    ModelConsulHandlerConfig,
)

__all__: list[str] = [
    "HandlerConsul",
    "ModelConsulHandlerConfig",
]
