"""Event types and the interfaces between streams and the counting core."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

from kube_count.domains.catalog.models import ResourceTypeIdentity


class EventType(str, Enum):
    """Change events that affect object counts."""

    ADDED = "ADDED"
    DELETED = "DELETED"


@dataclass(frozen=True)
class WatchEvent:
    """One object appearing or disappearing.

    Only the resource type and the object's namespace are carried; the
    namespace is empty for cluster-scoped objects.
    """

    type: EventType
    identity: ResourceTypeIdentity
    namespace: str = ""


class EventStream(Protocol):
    """A change feed for one resource type.

    Iterating yields the current objects as ADDED events, then incremental
    events until the stream is closed.
    """

    def __iter__(self) -> Iterator[WatchEvent]: ...

    def has_synced(self) -> bool:
        """True once every object of the initial list has been consumed."""
        ...

    def close(self) -> None: ...


class StreamSource(Protocol):
    """Opens change feeds, one per resource type."""

    def open(self, identity: ResourceTypeIdentity, namespace: str | None) -> EventStream: ...


class EventSink(Protocol):
    """Receives the events of one resource type."""

    def on_add(self, namespace: str) -> None: ...

    def on_delete(self, namespace: str) -> None: ...
