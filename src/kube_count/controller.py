"""One-shot counting run: resolve, watch, sync, snapshot, aggregate."""

from __future__ import annotations

import logging
from enum import Enum

from kube_count.config import CountConfig
from kube_count.domains.catalog.client import TypeCatalog
from kube_count.domains.counting.aggregator import aggregate
from kube_count.domains.counting.models import Record, ResolutionResult, SortOrder
from kube_count.domains.counting.resolver import ResourceTypeResolver
from kube_count.domains.counting.store import CounterStore
from kube_count.domains.watch.barrier import SyncBarrier
from kube_count.domains.watch.models import StreamSource
from kube_count.domains.watch.multiplexer import WatchMultiplexer
from kube_count.utils.errors import EmptyResultError

logger = logging.getLogger(__name__)


class ControllerPhase(str, Enum):
    """Lifecycle of a counting run."""

    CREATED = "created"
    RESOLVING = "resolving"
    WATCHING = "watching"
    SYNCING = "syncing"
    SNAPSHOTTING = "snapshotting"
    AGGREGATING = "aggregating"
    DONE = "done"
    FAILED = "failed"


class CounterController:
    """Counts live objects for a set of resource type tokens.

    A controller performs a single run. The counter store and resolution
    order are created per run and discarded afterwards.
    """

    def __init__(
        self,
        config: CountConfig,
        catalog: TypeCatalog,
        source: StreamSource,
    ) -> None:
        self._config = config
        self._catalog = catalog
        self._source = source
        self._phase = ControllerPhase.CREATED

    @property
    def phase(self) -> ControllerPhase:
        return self._phase

    def _enter(self, phase: ControllerPhase) -> None:
        logger.debug(f"{self._phase.value} -> {phase.value}")
        self._phase = phase

    def resolve(self, tokens: str) -> ResolutionResult:
        """Resolve tokens against the catalog.

        Raises:
            CatalogError: If the catalog cannot be read.
            ResolutionError: If nothing matches.
        """
        resolver = ResourceTypeResolver(self._catalog.lookup())
        return resolver.resolve(tokens)

    def run(
        self,
        tokens: str,
        namespace: str | None = None,
        sort_order: SortOrder = SortOrder.ASC,
        collapse_namespaces: bool = False,
    ) -> list[Record]:
        """Count objects of every resource type matching the tokens.

        Args:
            tokens: Comma-separated resource type names or aliases.
            namespace: Restrict namespaced types to this namespace.
            sort_order: Count order within each resource type.
            collapse_namespaces: Report one total per resource type.

        Returns:
            Records grouped by resource type in resolution order.

        Raises:
            CatalogError: If the catalog cannot be read.
            ResolutionError: If no resource type matches.
            SyncFailure: If a watch does not finish its initial list in time.
            EmptyResultError: If no objects were found.
        """
        if self._phase != ControllerPhase.CREATED:
            raise RuntimeError("CounterController can only run once")

        try:
            records = self._run(tokens, namespace, sort_order, collapse_namespaces)
        except BaseException:
            self._enter(ControllerPhase.FAILED)
            raise

        self._enter(ControllerPhase.DONE)
        return records

    def _run(
        self,
        tokens: str,
        namespace: str | None,
        sort_order: SortOrder,
        collapse_namespaces: bool,
    ) -> list[Record]:
        self._enter(ControllerPhase.RESOLVING)
        resolution = self.resolve(tokens)
        logger.info(
            "Counting " + ", ".join(str(identity) for identity in resolution.identities)
        )

        store = CounterStore()
        multiplexer = WatchMultiplexer(self._source, store, namespace=namespace)
        try:
            self._enter(ControllerPhase.WATCHING)
            multiplexer.start(resolution.order)

            self._enter(ControllerPhase.SYNCING)
            barrier = SyncBarrier(
                multiplexer.streams,
                multiplexer.cancel_token,
                poll_interval=self._config.sync_poll_interval_seconds,
            )
            barrier.wait(self._config.sync_timeout_seconds)
        finally:
            multiplexer.stop(self._config.shutdown_timeout_seconds)

        self._enter(ControllerPhase.SNAPSHOTTING)
        snapshot = store.snapshot()

        self._enter(ControllerPhase.AGGREGATING)
        records = aggregate(
            snapshot,
            resolution.order,
            sort_order=sort_order,
            collapse_namespaces=collapse_namespaces,
        )
        if not records:
            raise EmptyResultError()
        return records
