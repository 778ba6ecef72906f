# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Test helpers for consul_discovery tests.

Available Utilities:
    Consul Fakes:
        - FakeConsulState: In-memory agent services, checks and catalog index
        - build_fake_consul_client: MagicMock consul.Consul backed by FakeConsulState
"""

from tests.helpers.consul_fakes import FakeConsulState, build_fake_consul_client

__all__: list[str] = [
    "FakeConsulState",
    "build_fake_consul_client",
]
