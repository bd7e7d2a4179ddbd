"""Wait for every stream's initial list before reading counts."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Sequence

from kube_count.domains.catalog.models import ResourceTypeIdentity
from kube_count.utils.errors import SyncFailure

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.1


class SyncBarrier:
    """Blocks until all registered streams report initial sync.

    On success the shared cancellation token is set, stopping further event
    delivery before the caller reads a snapshot.
    """

    def __init__(
        self,
        streams: Sequence[tuple[ResourceTypeIdentity, Callable[[], bool]]],
        cancel_token: threading.Event,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._streams = list(streams)
        self._cancel = cancel_token
        self._poll_interval = poll_interval

    def wait(self, timeout: float | None = None) -> None:
        """Wait for sync.

        Args:
            timeout: Seconds to wait; None waits forever.

        Raises:
            SyncFailure: Naming the first unsynced stream, if the timeout
                passes or the cancellation token is set by someone else.
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        pending = self._streams

        while True:
            pending = [(identity, synced) for identity, synced in pending if not synced()]
            if not pending:
                break
            if self._cancel.is_set():
                raise SyncFailure(pending[0][0], "cancelled")
            if deadline is not None and time.monotonic() >= deadline:
                raise SyncFailure(pending[0][0], f"timed out after {timeout:g}s")
            # Wakes early if cancelled.
            self._cancel.wait(self._poll_interval)

        logger.debug(f"All {len(self._streams)} watches synced")
        self._cancel.set()
