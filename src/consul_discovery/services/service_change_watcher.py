# SPDX-License-Identifier: MIT
# Copyright (c) 2025 OmniNode Team
"""Upstream Change Watcher.

Answers "has this upstream service changed since I last asked?" for
``(service name, tag)`` keys, so dependents re-render configuration only
when the instance set or its health actually moved.

State machine per key::

    Unseen --first query--> Seen(sig)              returns False (baseline)
    Seen(sig) --same signature--> Seen(sig)        returns False
    Seen(sig) --different signature--> Seen(new)   returns True

The store index is used as a pre-check only: an unchanged non-zero index
means an unchanged result, so the call returns False without comparing. Any
other index falls through to the signature comparison.

Thread Safety:
    Query, compare and store run under a per-key threading.Lock, so two
    concurrent callers on the same key see one True for one real transition
    and no transition is lost. Different keys proceed concurrently. The
    signature map itself is guarded by a separate lock.

Lifecycle:
    The watcher is constructed explicitly and owned by whatever drives the
    watch loop. ``reset`` clears all state when that loop restarts.
"""

from __future__ import annotations

import logging
import threading
from uuid import UUID, uuid4

from consul_discovery.errors import RuntimeHostError
from consul_discovery.handlers import HandlerConsul
from consul_discovery.models import ModelChangeSignature, ModelWatchState

logger = logging.getLogger(__name__)

WatchKey = tuple[str, str]


class ServiceChangeWatcher:
    """Tracks the last observed catalog signature per (service name, tag).

    Args:
        handler: Catalog client used for queries.
        degrade_on_query_error: When True a failed query is logged and
            reported as "no change"; when False (default) the error is raised
            so a dependent never silently misses a change.
        watch_wait_seconds: When set, queries for keys with a known index are
            issued as blocking queries that return as soon as the index moves
            or after this many seconds.

    Example:
        >>> watcher = ServiceChangeWatcher(handler)
        >>> watcher.has_changed("db")
        False
        >>> # ... an instance of "db" registers and passes its check ...
        >>> watcher.has_changed("db")
        True
    """

    def __init__(
        self,
        handler: HandlerConsul,
        degrade_on_query_error: bool = False,
        watch_wait_seconds: float | None = None,
    ) -> None:
        self._handler = handler
        self._degrade_on_query_error = degrade_on_query_error
        self._watch_wait_seconds = watch_wait_seconds
        self._states: dict[WatchKey, ModelWatchState] = {}
        self._states_guard = threading.Lock()
        self._key_locks: dict[WatchKey, threading.Lock] = {}
        self._key_locks_guard = threading.Lock()

    def has_changed(
        self,
        service_name: str,
        tag: str = "",
        correlation_id: UUID | None = None,
    ) -> bool:
        """Report whether the catalog state for the key moved since the last call.

        Returns:
            False on the first call for a key (baseline) and whenever the
            signature is unchanged; True when it changed.

        Raises:
            RuntimeHostError: Query failure, unless degrade_on_query_error is set.
        """
        correlation_id = correlation_id or uuid4()
        key: WatchKey = (service_name, tag)

        with self._lock_for(key):
            previous = self._get_state(key)
            blocking_index = previous.index if previous is not None else None
            try:
                entries, meta = self._handler.query_catalog(
                    service_name,
                    tag,
                    index=blocking_index if self._watch_wait_seconds else None,
                    wait_seconds=self._watch_wait_seconds,
                    correlation_id=correlation_id,
                )
            except RuntimeHostError as e:
                if not self._degrade_on_query_error:
                    raise
                logger.warning(
                    "Catalog query failed, reporting no change",
                    extra={
                        "service_name": service_name,
                        "tag": tag,
                        "error_type": type(e).__name__,
                        "correlation_id": str(correlation_id),
                    },
                )
                return False

            if previous is not None and meta.index and meta.index == previous.index:
                return False

            signature = ModelChangeSignature.from_entries(entries)
            self._set_state(key, ModelWatchState(signature=signature, index=meta.index))

            if previous is None:
                logger.debug(
                    "Recorded baseline for upstream",
                    extra={
                        "service_name": service_name,
                        "tag": tag,
                        "instances": signature.instance_count,
                        "correlation_id": str(correlation_id),
                    },
                )
                return False

            changed = signature != previous.signature
            if changed:
                logger.info(
                    "Upstream changed",
                    extra={
                        "service_name": service_name,
                        "tag": tag,
                        "instances": signature.instance_count,
                        "previous_instances": previous.signature.instance_count,
                        "correlation_id": str(correlation_id),
                    },
                )
            return changed

    def signature(self, service_name: str, tag: str = "") -> ModelChangeSignature | None:
        """Last stored signature for a key, or None when the key is unseen."""
        state = self._get_state((service_name, tag))
        return state.signature if state is not None else None

    def tracked_keys(self) -> list[WatchKey]:
        with self._states_guard:
            return sorted(self._states)

    def forget(self, service_name: str, tag: str = "") -> None:
        """Drop one key and its lock; its next query records a new baseline."""
        key: WatchKey = (service_name, tag)
        with self._lock_for(key):
            with self._states_guard:
                self._states.pop(key, None)
            with self._key_locks_guard:
                self._key_locks.pop(key, None)

    def reset(self) -> None:
        """Drop every stored signature and per-key lock."""
        with self._states_guard:
            self._states.clear()
        with self._key_locks_guard:
            self._key_locks.clear()

    def _get_state(self, key: WatchKey) -> ModelWatchState | None:
        with self._states_guard:
            return self._states.get(key)

    def _set_state(self, key: WatchKey, state: ModelWatchState) -> None:
        with self._states_guard:
            self._states[key] = state

    def _lock_for(self, key: WatchKey) -> threading.Lock:
        with self._key_locks_guard:
            lock = self._key_locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._key_locks[key] = lock
            return lock


__all__: list[str] = ["ServiceChangeWatcher", "WatchKey"]
