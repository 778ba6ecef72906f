# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Shared pytest configuration for integration tests against a live Consul agent.

All tests under tests/integration/ are marked ``integration`` by the
collection hook below. Tests skip themselves when no agent is reachable.

Environment Variables:
    CONSUL_HOST: Consul hostname (required; tests skip when unset)
    CONSUL_PORT: Consul port (default: 8500)
    CONSUL_SCHEME: HTTP scheme (default: http)
    CONSUL_TOKEN: ACL token for authentication

Usage:
    # Run only integration tests
    CONSUL_HOST=127.0.0.1 pytest -m integration

    # Run all except integration tests
    pytest -m "not integration"
"""

from __future__ import annotations

import os
import uuid
from collections.abc import Callable, Generator

import pytest

from consul_discovery.handlers import ModelConsulHandlerConfig
from consul_discovery.models import ModelServiceDefinition
from consul_discovery.services import ServiceConsulBackend

# =============================================================================
# Consul Environment Configuration
# =============================================================================

CONSUL_HOST = os.getenv("CONSUL_HOST")
CONSUL_PORT = int(os.getenv("CONSUL_PORT", "8500"))
CONSUL_SCHEME = os.getenv("CONSUL_SCHEME", "http")
CONSUL_TOKEN = os.getenv("CONSUL_TOKEN")


def _check_consul_reachable() -> bool:
    """Check if the Consul agent accepts TCP connections.

    Returns:
        bool: True if Consul is reachable, False otherwise.
    """
    if CONSUL_HOST is None:
        return False

    import socket

    try:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
            sock.settimeout(5.0)
            result = sock.connect_ex((CONSUL_HOST, CONSUL_PORT))
            return result == 0
    except (OSError, TimeoutError):
        return False


# Check Consul reachability at module import time
CONSUL_AVAILABLE = _check_consul_reachable()


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Add the integration marker to every test in the integration directory."""
    integration_marker = pytest.mark.integration

    for item in items:
        if "tests/integration" in str(item.fspath):
            if not any(marker.name == "integration" for marker in item.iter_markers()):
                item.add_marker(integration_marker)


# =============================================================================
# Consul Fixtures
# =============================================================================


@pytest.fixture
def consul_config() -> ModelConsulHandlerConfig:
    """Provide handler configuration for the live agent."""
    return ModelConsulHandlerConfig.from_mapping(
        {
            "host": CONSUL_HOST or "localhost",
            "port": CONSUL_PORT,
            "scheme": CONSUL_SCHEME,
            "token": CONSUL_TOKEN,
        }
    )


@pytest.fixture
def live_backend(consul_config: ModelConsulHandlerConfig) -> ServiceConsulBackend:
    return ServiceConsulBackend.from_config(consul_config)


@pytest.fixture
def unique_service_name() -> str:
    """Generate a service name no other test run uses."""
    return f"service-it-{uuid.uuid4().hex[:12]}"


@pytest.fixture
def live_definition(
    live_backend: ServiceConsulBackend,
    unique_service_name: str,
) -> Generator[Callable[..., ModelServiceDefinition], None, None]:
    """Factory for definitions that are deregistered after the test."""
    created: set[str] = set()

    def _make(**overrides: object) -> ModelServiceDefinition:
        values: dict[str, object] = {
            "id": unique_service_name,
            "name": unique_service_name,
            "address": "192.168.1.1",
            "port": 9000,
            "ttl": 5,
        }
        values.update(overrides)
        definition = ModelServiceDefinition.model_validate(values)
        created.add(definition.id)
        return definition

    yield _make

    for service_id in created:
        try:
            live_backend.client.deregister(service_id)
        except Exception:
            pass  # Ignore cleanup errors
