"""Watch domain: change streams, the multiplexer and the sync barrier."""

from kube_count.domains.watch.barrier import SyncBarrier
from kube_count.domains.watch.models import (
    EventSink,
    EventStream,
    EventType,
    StreamSource,
    WatchEvent,
)
from kube_count.domains.watch.multiplexer import CountingEventSink, WatchMultiplexer
from kube_count.domains.watch.source import KubernetesStreamSource

__all__ = [
    "CountingEventSink",
    "EventSink",
    "EventStream",
    "EventType",
    "KubernetesStreamSource",
    "StreamSource",
    "SyncBarrier",
    "WatchEvent",
    "WatchMultiplexer",
]
