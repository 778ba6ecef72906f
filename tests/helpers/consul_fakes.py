# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""In-memory stand-in for a Consul agent behind a mocked consul.Consul client.

The mock exposes the python-consul call surface used by HandlerConsul
(``agent.service.*``, ``agent.check.*``, ``agent.services``,
``agent.checks``, ``health.service``, ``catalog.service``). Each method is a
MagicMock whose side effect reads or writes FakeConsulState, so tests can
assert both the resulting store state and exact call counts.

Index semantics follow Consul: the index moves on every write that changes
catalog-visible state. A TTL pass that leaves status and output unchanged
does not move it.

Usage Example:
    >>> state = FakeConsulState()
    >>> client = build_fake_consul_client(state)
    >>> handler = HandlerConsul(client)
    >>> handler.register(definition)
    >>> state.checks[definition.id]["Status"]
    'critical'
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from unittest.mock import MagicMock

NODE_NAME = "node-1"
NODE_ADDRESS = "10.0.0.1"


@dataclass
class FakeConsulState:
    """Services, checks and the catalog index of one fake agent."""

    services: dict[str, dict[str, object]] = field(default_factory=dict)
    checks: dict[str, dict[str, object]] = field(default_factory=dict)
    index: int = 1

    def bump(self) -> None:
        self.index += 1

    def expire(self, check_id: str) -> None:
        """Simulate the store turning a TTL check critical after expiry."""
        check = self.checks[check_id]
        check["Status"] = "critical"
        check["Output"] = "TTL expired"
        self.bump()

    # agent.service

    def register_service(
        self,
        name: str,
        service_id: str | None = None,
        address: str | None = None,
        port: int | None = None,
        tags: list[str] | None = None,
        enable_tag_override: bool = False,
        **_: object,
    ) -> bool:
        sid = service_id or name
        self.services[sid] = {
            "ID": sid,
            "Service": name,
            "Address": address or "",
            "Port": port or 0,
            "Tags": list(tags) if tags else None,
            "EnableTagOverride": enable_tag_override,
        }
        self.bump()
        return True

    def deregister_service(self, service_id: str) -> bool:
        if service_id not in self.services:
            return False
        del self.services[service_id]
        for check_id in [
            cid for cid, c in self.checks.items() if c["ServiceID"] == service_id
        ]:
            del self.checks[check_id]
        self.bump()
        return True

    def maintenance(
        self, service_id: str, enable: str, reason: str | None = None
    ) -> bool:
        if service_id not in self.services:
            return False
        check_id = f"_service_maintenance:{service_id}"
        if enable == "true":
            self.checks[check_id] = {
                "CheckID": check_id,
                "Name": "Service Maintenance Mode",
                "Status": "critical",
                "Notes": reason or "",
                "Output": "",
                "ServiceID": service_id,
            }
        else:
            self.checks.pop(check_id, None)
        self.bump()
        return True

    # agent.check

    def register_check(
        self,
        name: str,
        check: dict[str, object] | None = None,
        check_id: str | None = None,
        notes: str | None = None,
        service_id: str | None = None,
        **_: object,
    ) -> bool:
        check = check or {}
        cid = check_id or name
        self.checks[cid] = {
            "CheckID": cid,
            "Name": name,
            "Status": check.get("Status", "critical"),
            "Notes": notes or "",
            "Output": "",
            "ServiceID": service_id or "",
            "Definition": dict(check),
        }
        self.bump()
        return True

    def update_ttl(self, check_id: str, status: str, notes: str | None) -> bool:
        check = self.checks.get(check_id)
        if check is None:
            return False
        output = notes or ""
        if check["Status"] != status or check["Output"] != output:
            check["Status"] = status
            check["Output"] = output
            self.bump()
        return True

    # reads

    def health_service(
        self,
        service: str,
        index: int | None = None,
        wait: str | None = None,
        passing: bool | None = None,
        tag: str | None = None,
        dc: str | None = None,
        **_: object,
    ) -> tuple[int, list[dict[str, object]]]:
        nodes = []
        for sid, svc in self.services.items():
            if not self._matches(svc, service, tag):
                continue
            checks = [
                {
                    "Node": NODE_NAME,
                    "CheckID": "serfHealth",
                    "Status": "passing",
                    "ServiceID": "",
                }
            ]
            checks.extend(
                {
                    "Node": NODE_NAME,
                    "CheckID": c["CheckID"],
                    "Status": c["Status"],
                    "ServiceID": sid,
                    "Output": c["Output"],
                }
                for c in self.checks.values()
                if c["ServiceID"] == sid
            )
            nodes.append(
                {
                    "Node": {"Node": NODE_NAME, "Address": NODE_ADDRESS},
                    "Service": copy.deepcopy(svc),
                    "Checks": checks,
                }
            )
        return self.index, nodes

    def catalog_service(
        self,
        service: str,
        tag: str | None = None,
        dc: str | None = None,
        **_: object,
    ) -> tuple[int, list[dict[str, object]]]:
        records = [
            {
                "Node": NODE_NAME,
                "Address": NODE_ADDRESS,
                "ServiceID": svc["ID"],
                "ServiceName": svc["Service"],
                "ServiceAddress": svc["Address"],
                "ServicePort": svc["Port"],
                "ServiceTags": svc["Tags"],
                "ServiceEnableTagOverride": svc["EnableTagOverride"],
            }
            for svc in self.services.values()
            if self._matches(svc, service, tag)
        ]
        return self.index, records

    @staticmethod
    def _matches(svc: dict[str, object], name: str, tag: str | None) -> bool:
        if svc["Service"] != name:
            return False
        if tag is None:
            return True
        tags = svc["Tags"]
        return isinstance(tags, list) and tag in tags


def build_fake_consul_client(state: FakeConsulState | None = None) -> MagicMock:
    """Return a MagicMock consul.Consul whose calls operate on ``state``."""
    state = state if state is not None else FakeConsulState()
    client = MagicMock()
    client.fake_state = state

    client.agent.service.register = MagicMock(side_effect=state.register_service)
    client.agent.service.deregister = MagicMock(side_effect=state.deregister_service)
    client.agent.service.maintenance = MagicMock(side_effect=state.maintenance)
    client.agent.check.register = MagicMock(side_effect=state.register_check)
    client.agent.check.ttl_pass = MagicMock(
        side_effect=lambda check_id, notes=None: state.update_ttl(
            check_id, "passing", notes
        )
    )
    client.agent.check.ttl_warn = MagicMock(
        side_effect=lambda check_id, notes=None: state.update_ttl(
            check_id, "warning", notes
        )
    )
    client.agent.check.ttl_fail = MagicMock(
        side_effect=lambda check_id, notes=None: state.update_ttl(
            check_id, "critical", notes
        )
    )
    client.agent.services = MagicMock(
        side_effect=lambda: copy.deepcopy(state.services)
    )
    client.agent.checks = MagicMock(side_effect=lambda: copy.deepcopy(state.checks))
    client.health.service = MagicMock(side_effect=state.health_service)
    client.catalog.service = MagicMock(side_effect=state.catalog_service)
    return client


__all__: list[str] = [
    "FakeConsulState",
    "NODE_ADDRESS",
    "NODE_NAME",
    "build_fake_consul_client",
]
