# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Unit tests for ModelServiceDefinition."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from consul_discovery.enums import EnumCheckStatus
from consul_discovery.models import ModelServiceDefinition


def _definition(**overrides: object) -> ModelServiceDefinition:
    values: dict[str, object] = {
        "id": "service-X",
        "name": "service-X",
        "address": "192.168.1.1",
        "port": 9000,
        "ttl": 5,
    }
    values.update(overrides)
    return ModelServiceDefinition.model_validate(values)


class TestModelServiceDefinition:
    def test_defaults(self) -> None:
        definition = _definition()

        assert definition.enable_tag_override is False
        assert definition.tags == ()
        assert definition.initial_status is None
        assert definition.deregister_critical_service_after is None

    def test_derived_fields(self) -> None:
        definition = _definition(ttl=30)

        assert definition.check_id == "service-X"
        assert definition.ttl_duration == "30s"

    def test_id_is_immutable(self) -> None:
        definition = _definition()

        with pytest.raises(ValidationError):
            definition.id = "service-Y"  # type: ignore[misc]

    def test_changed_address_is_a_new_definition(self) -> None:
        original = _definition()
        moved = original.model_copy(update={"address": "192.168.1.2"})

        assert moved.id == original.id
        assert moved.address == "192.168.1.2"
        assert original.address == "192.168.1.1"

    @pytest.mark.parametrize(
        "overrides",
        [
            {"id": ""},
            {"name": ""},
            {"port": 70000},
            {"port": -1},
            {"ttl": 0},
            {"unknown": True},
        ],
    )
    def test_invalid_values_rejected(self, overrides: dict[str, object]) -> None:
        with pytest.raises(ValidationError):
            _definition(**overrides)

    def test_initial_status_cannot_be_maintenance(self) -> None:
        with pytest.raises(ValidationError):
            _definition(initial_status=EnumCheckStatus.MAINTENANCE)

    def test_initial_status_from_string(self) -> None:
        definition = _definition(initial_status="passing")

        assert definition.initial_status is EnumCheckStatus.PASSING
