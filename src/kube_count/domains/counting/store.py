"""Thread-safe object counter keyed by resource type and namespace."""

from __future__ import annotations

from threading import Lock

from kube_count.domains.catalog.models import ResourceTypeIdentity

Snapshot = dict[ResourceTypeIdentity, dict[str, int]]


class CounterStore:
    """Nested counter updated concurrently by the watch workers.

    Counts are adds minus deletes and are not clamped, so a delete seen
    before its add leaves a negative count. Entries are never removed.
    """

    def __init__(self) -> None:
        self._counts: Snapshot = {}
        self._lock = Lock()

    def increment(self, identity: ResourceTypeIdentity, namespace: str) -> None:
        self._apply(identity, namespace, 1)

    def decrement(self, identity: ResourceTypeIdentity, namespace: str) -> None:
        self._apply(identity, namespace, -1)

    def _apply(self, identity: ResourceTypeIdentity, namespace: str, delta: int) -> None:
        with self._lock:
            namespaces = self._counts.setdefault(identity, {})
            namespaces[namespace] = namespaces.get(namespace, 0) + delta

    def snapshot(self) -> Snapshot:
        """Point-in-time copy of every observed count."""
        with self._lock:
            return {identity: dict(namespaces) for identity, namespaces in self._counts.items()}
