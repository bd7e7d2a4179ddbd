"""Turn a counter snapshot into ordered output records."""

from __future__ import annotations

from collections.abc import Sequence

from kube_count.domains.catalog.models import ResourceTypeIdentity
from kube_count.domains.counting.models import Record, SortOrder
from kube_count.domains.counting.store import Snapshot


def _group_records(
    identity: ResourceTypeIdentity,
    namespaces: dict[str, int],
    collapse_namespaces: bool,
) -> list[Record]:
    if collapse_namespaces:
        return [Record(namespace="", identity=identity, count=sum(namespaces.values()))]
    return [
        Record(namespace=namespace, identity=identity, count=count)
        for namespace, count in namespaces.items()
    ]


def _sort_group(records: list[Record], sort_order: SortOrder) -> list[Record]:
    # Equal counts fall back to namespace name so output is deterministic.
    if sort_order == SortOrder.DESC:
        return sorted(records, key=lambda r: (-r.count, r.namespace))
    return sorted(records, key=lambda r: (r.count, r.namespace))


def aggregate(
    snapshot: Snapshot,
    order: Sequence[ResourceTypeIdentity],
    sort_order: SortOrder = SortOrder.ASC,
    collapse_namespaces: bool = False,
) -> list[Record]:
    """Build the final record list.

    Args:
        snapshot: Counts per identity and namespace.
        order: Resolution order; one group of records is emitted per entry.
        sort_order: Direction for sorting counts inside each group.
        collapse_namespaces: Sum each identity's namespaces into one record.

    Returns:
        Records grouped by identity in resolution order. Identities with no
        observed objects produce no records.
    """
    records: list[Record] = []
    for identity in order:
        namespaces = snapshot.get(identity)
        if not namespaces:
            continue
        group = _group_records(identity, namespaces, collapse_namespaces)
        records.extend(_sort_group(group, sort_order))
    return records
