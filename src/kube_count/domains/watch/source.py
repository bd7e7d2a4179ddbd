"""Kubernetes list/watch streams built on the dynamic client.

Each stream lists the resource type page by page, emitting one ADDED event
per object, then watches from the list's resource version. Watches that end
on the server-side timeout, or that stay silent past the client-side read
timeout, are reopened from the last seen resource version until the stream
is closed.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from kubernetes import watch  # type: ignore[import-untyped]
from urllib3.exceptions import ReadTimeoutError

from kube_count.domains.catalog.models import ResourceTypeIdentity
from kube_count.domains.watch.models import EventType, WatchEvent

if TYPE_CHECKING:
    from kube_count.clients.base import K8sClient
    from kube_count.config import CountConfig

logger = logging.getLogger(__name__)

DEFAULT_READ_TIMEOUT = 2.0

# Watch event types mapped to count changes; MODIFIED and BOOKMARK do not count.
_COUNTED_EVENTS = {
    "ADDED": EventType.ADDED,
    "DELETED": EventType.DELETED,
}


class WatchStreamError(Exception):
    """The API server reported an error on a watch."""

    pass


def _namespace_of(obj: dict[str, Any]) -> str:
    return (obj.get("metadata") or {}).get("namespace") or ""


def _resource_version_of(obj: dict[str, Any]) -> str | None:
    return (obj.get("metadata") or {}).get("resourceVersion")


class KubernetesEventStream:
    """List-then-watch feed for a single resource type.

    ``close()`` cannot interrupt a socket read, so every watch request
    carries a client-side read timeout. A closed stream therefore notices
    the close within ``read_timeout`` seconds even when no events arrive.
    """

    def __init__(
        self,
        k8s: K8sClient,
        identity: ResourceTypeIdentity,
        namespace: str | None,
        page_size: int,
        watch_timeout: int,
        discovery_lock: threading.Lock,
        read_timeout: float = DEFAULT_READ_TIMEOUT,
    ) -> None:
        self._k8s = k8s
        self._identity = identity
        self._namespace = namespace
        self._page_size = page_size
        self._watch_timeout = watch_timeout
        self._read_timeout = read_timeout
        self._discovery_lock = discovery_lock
        self._watcher = watch.Watch()
        self._synced = threading.Event()
        self._closed = threading.Event()

    @property
    def identity(self) -> ResourceTypeIdentity:
        return self._identity

    def has_synced(self) -> bool:
        return self._synced.is_set()

    def close(self) -> None:
        self._closed.set()
        self._watcher.stop()

    def __iter__(self) -> Iterator[WatchEvent]:
        return self._events()

    def _resource(self) -> Any:
        # The dynamic client's discovery cache is not safe for concurrent use.
        with self._discovery_lock:
            return self._k8s.dynamic.resources.get(
                api_version=self._identity.group_version,
                name=self._identity.plural,
            )

    def _events(self) -> Iterator[WatchEvent]:
        resource = self._resource()
        # A namespace restriction only applies to namespaced types.
        namespace = self._namespace if resource.namespaced else None

        resource_version = yield from self._list(resource, namespace)
        # Resumed only after the consumer has applied the last listed object.
        self._synced.set()
        logger.debug(f"{self._identity} synced at resourceVersion {resource_version}")

        while not self._closed.is_set():
            resource_version = yield from self._watch(resource, namespace, resource_version)

    def _list(self, resource: Any, namespace: str | None) -> Iterator[WatchEvent]:
        """Emit every current object; returns the list's resource version."""
        continue_token: str | None = None
        while True:
            page = self._k8s.dynamic.get(
                resource,
                namespace=namespace,
                limit=self._page_size,
                _continue=continue_token,
            ).to_dict()
            for item in page.get("items") or []:
                yield WatchEvent(EventType.ADDED, self._identity, _namespace_of(item))

            metadata = page.get("metadata") or {}
            continue_token = metadata.get("continue")
            if not continue_token:
                return metadata.get("resourceVersion")

    def _watch(
        self,
        resource: Any,
        namespace: str | None,
        resource_version: str | None,
    ) -> Iterator[WatchEvent]:
        """Emit events of one watch request; returns the last resource version seen."""
        # Watch.stream() clears the stop flag, so a close() racing with the
        # loop condition is only caught here or by the read timeout.
        if self._closed.is_set():
            return resource_version

        events = self._watcher.stream(
            self._k8s.dynamic.get,
            resource,
            namespace=namespace,
            resource_version=resource_version,
            timeout_seconds=self._watch_timeout,
            serialize=False,
            _request_timeout=(self._read_timeout, self._read_timeout),
        )
        try:
            for event in events:
                if self._closed.is_set():
                    break

                event_type = event.get("type")
                raw = event.get("raw_object") or {}
                if event_type == "ERROR":
                    raise WatchStreamError(
                        f"watch error {raw.get('code')}: {raw.get('message', 'unknown')}"
                    )

                resource_version = _resource_version_of(raw) or resource_version
                counted = _COUNTED_EVENTS.get(event_type)
                if counted is not None:
                    yield WatchEvent(counted, self._identity, _namespace_of(raw))
        except ReadTimeoutError:
            logger.debug(f"Watch for {self._identity} idle, reopening at {resource_version}")

        return resource_version


class KubernetesStreamSource:
    """Opens list/watch streams against a connected cluster."""

    def __init__(self, k8s: K8sClient, config_obj: CountConfig) -> None:
        self._k8s = k8s
        self._page_size = config_obj.list_page_size
        self._watch_timeout = config_obj.watch_timeout_seconds
        self._read_timeout = config_obj.watch_read_timeout_seconds
        self._discovery_lock = threading.Lock()

    def open(self, identity: ResourceTypeIdentity, namespace: str | None) -> KubernetesEventStream:
        """Create a stream; no request is made until it is iterated."""
        return KubernetesEventStream(
            self._k8s,
            identity,
            namespace,
            page_size=self._page_size,
            watch_timeout=self._watch_timeout,
            discovery_lock=self._discovery_lock,
            read_timeout=self._read_timeout,
        )
