# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Pytest configuration and shared fixtures for consul_discovery tests."""

from __future__ import annotations

from collections.abc import Callable
from unittest.mock import MagicMock

import pytest

from consul_discovery.handlers import HandlerConsul, ModelConsulHandlerConfig
from consul_discovery.models import ModelServiceDefinition
from tests.helpers.consul_fakes import FakeConsulState, build_fake_consul_client


@pytest.fixture
def consul_state() -> FakeConsulState:
    """Provide an empty fake agent state."""
    return FakeConsulState()


@pytest.fixture
def mock_consul_client(consul_state: FakeConsulState) -> MagicMock:
    """Provide a mocked consul.Consul client backed by ``consul_state``."""
    return build_fake_consul_client(consul_state)


@pytest.fixture
def handler_config() -> ModelConsulHandlerConfig:
    return ModelConsulHandlerConfig(host="consul.example.com", port=8500)


@pytest.fixture
def handler(
    mock_consul_client: MagicMock, handler_config: ModelConsulHandlerConfig
) -> HandlerConsul:
    """Provide a HandlerConsul wired to the fake agent."""
    return HandlerConsul(mock_consul_client, handler_config)


@pytest.fixture
def make_definition() -> Callable[..., ModelServiceDefinition]:
    """Factory for service definitions with test defaults.

    Mirrors the definition a sidecar builds at startup: name defaults to the
    id, address 192.168.1.1, port 9000, ttl 5. Pass ``name=`` to put several
    instances under one service name.
    """

    def _make(
        service_id: str = "service-test", **overrides: object
    ) -> ModelServiceDefinition:
        values: dict[str, object] = {
            "id": service_id,
            "name": service_id,
            "address": "192.168.1.1",
            "port": 9000,
            "ttl": 5,
        }
        values.update(overrides)
        return ModelServiceDefinition.model_validate(values)

    return _make
