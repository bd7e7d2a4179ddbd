"""Fan out one watch worker per resource type into a shared counter."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from kube_count.domains.catalog.models import ResourceTypeIdentity
from kube_count.domains.counting.store import CounterStore
from kube_count.domains.watch.models import EventStream, EventType, StreamSource, WatchEvent

logger = logging.getLogger(__name__)


class CountingEventSink:
    """Applies the events of one resource type to the counter store.

    Events that arrive after the shared cancellation token is set are
    dropped, so nothing changes once the snapshot phase has begun.
    """

    def __init__(
        self,
        store: CounterStore,
        identity: ResourceTypeIdentity,
        cancelled: threading.Event,
    ) -> None:
        self._store = store
        self._identity = identity
        self._cancelled = cancelled

    @property
    def identity(self) -> ResourceTypeIdentity:
        return self._identity

    def on_add(self, namespace: str) -> None:
        if not self._cancelled.is_set():
            self._store.increment(self._identity, namespace)

    def on_delete(self, namespace: str) -> None:
        if not self._cancelled.is_set():
            self._store.decrement(self._identity, namespace)

    def dispatch(self, event: WatchEvent) -> None:
        if event.type == EventType.ADDED:
            self.on_add(event.namespace)
        elif event.type == EventType.DELETED:
            self.on_delete(event.namespace)


@dataclass
class WatchHandle:
    """A running stream with its worker thread."""

    identity: ResourceTypeIdentity
    stream: EventStream
    sink: CountingEventSink
    thread: threading.Thread


class WatchMultiplexer:
    """Runs one independent stream per resource type.

    A stream that fails is logged and abandoned; it never reports sync,
    which the sync barrier turns into a failure once its deadline passes.
    All workers share one cancellation token.
    """

    def __init__(
        self,
        source: StreamSource,
        store: CounterStore,
        namespace: str | None = None,
        cancel_token: threading.Event | None = None,
    ) -> None:
        self._source = source
        self._store = store
        self._namespace = namespace
        self._cancel = cancel_token or threading.Event()
        self._handles: list[WatchHandle] = []

    @property
    def cancel_token(self) -> threading.Event:
        return self._cancel

    @property
    def handles(self) -> list[WatchHandle]:
        return list(self._handles)

    @property
    def streams(self) -> list[tuple[ResourceTypeIdentity, Callable[[], bool]]]:
        """(identity, has_synced) pairs in start order, for the sync barrier."""
        return [(h.identity, h.stream.has_synced) for h in self._handles]

    def start(self, order: Sequence[ResourceTypeIdentity]) -> None:
        """Open a stream and start a worker for each entry of the resolution order.

        Raises:
            RuntimeError: If the multiplexer was already started.
        """
        if self._handles:
            raise RuntimeError("WatchMultiplexer already started")

        for identity in order:
            stream = self._source.open(identity, self._namespace)
            sink = CountingEventSink(self._store, identity, self._cancel)
            thread = threading.Thread(
                target=self._consume,
                args=(stream, sink),
                name=f"watch-{identity.plural}.{identity.group_version}",
                daemon=True,
            )
            self._handles.append(WatchHandle(identity, stream, sink, thread))

        for handle in self._handles:
            handle.thread.start()
        logger.debug(f"Started {len(self._handles)} watch workers")

    def _consume(self, stream: EventStream, sink: CountingEventSink) -> None:
        try:
            for event in stream:
                if self._cancel.is_set():
                    break
                sink.dispatch(event)
        except Exception as e:
            if self._cancel.is_set():
                logger.debug(f"Watch for {sink.identity} ended during shutdown: {e}")
            else:
                logger.warning(f"Watch for {sink.identity} failed, it will not sync: {e}")

    def stop(self, timeout: float | None = None) -> None:
        """Cancel every stream and join the workers.

        Args:
            timeout: Maximum total seconds to wait for all workers together.
                Workers still blocked on I/O afterwards are daemon threads and
                are left behind; their sinks already drop every event.
        """
        self._cancel.set()
        for handle in self._handles:
            try:
                handle.stream.close()
            except Exception as e:
                logger.debug(f"Error closing watch for {handle.identity}: {e}")

        deadline = None if timeout is None else time.monotonic() + timeout
        for handle in self._handles:
            if deadline is None:
                handle.thread.join()
            else:
                handle.thread.join(max(0.0, deadline - time.monotonic()))
            if handle.thread.is_alive():
                logger.debug(f"Watch worker for {handle.identity} still running after stop")
